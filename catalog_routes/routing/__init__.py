"""Locale/route router: canonical routes and the edge redirect decision."""

from catalog_routes.routing.domain.canonical import CanonicalRoute, canonical_route
from catalog_routes.routing.domain.locale import negotiate_locale, parse_accept_language
from catalog_routes.routing.domain.models import RouteContext, RouteDecision, RouterConfig
from catalog_routes.routing.domain.router import route
from catalog_routes.routing.infrastructure.http_adapter import to_http_response

__all__ = [
    "canonical_route",
    "CanonicalRoute",
    "negotiate_locale",
    "parse_accept_language",
    "route",
    "RouteContext",
    "RouteDecision",
    "RouterConfig",
    "to_http_response",
]
