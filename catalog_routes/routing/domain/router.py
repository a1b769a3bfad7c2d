"""Edge routing decision for inbound request paths.

`route` is pure and total: no state between calls, no exceptions, and any path that no
rule claims is allowed through unchanged. Every redirect target is already canonical, so
routing a target again always yields `allow`.
"""

import re

from catalog_routes.routing.domain.locale import negotiate_locale
from catalog_routes.routing.domain.models import RouteContext, RouteDecision, RouterConfig

DEFAULT_ROUTER_CONFIG = RouterConfig()

BRAND_SECTION_RE = re.compile(r"^/brands/[^/]+/(?:products|solutions|support)$")


def _under(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    if not prefix:
        return False
    return path == prefix or path.startswith(prefix + "/")


def _is_static_asset(path: str, config: RouterConfig) -> bool:
    last_segment = path.rsplit("/", 1)[-1]
    if "." in last_segment:
        return True
    return any(_under(path, prefix) for prefix in config.asset_prefixes)


def _split_locale(path: str, config: RouterConfig) -> tuple[str | None, str, bool]:
    """Return (locale, remainder, recased) where remainder is "" or starts with "/".

    The locale segment matches case-insensitively; `recased` is True when the path spelled
    it differently from the configured locale.
    """
    first = path[1:].split("/", 1)[0]
    if first:
        lowered = first.lower()
        for locale in config.locales:
            if locale.lower() == lowered:
                return locale, path[1 + len(first):], locale != first
    return None, path, False


def route(path: str, context: RouteContext | None = None, config: RouterConfig | None = None) -> RouteDecision:
    config = config or DEFAULT_ROUTER_CONFIG
    context = context or RouteContext()
    if not isinstance(path, str) or not path:
        path = "/"

    path = path.split("#", 1)[0]
    path, sep, query = path.partition("?")
    suffix = sep + query
    if not path.startswith("/"):
        path = "/" + path

    admin_root = config.admin_root.rstrip("/")
    # Rules 1-2: admin tool
    if admin_root and path == admin_root:
        return RouteDecision.redirect(admin_root + "/" + suffix)
    if admin_root and path.startswith(admin_root + "/"):
        return RouteDecision.allow()
    # Rules 3-5: back office, API, static assets
    if _under(path, config.backoffice_prefix) or _under(path, config.api_prefix):
        return RouteDecision.allow()
    if _is_static_asset(path, config):
        return RouteDecision.allow()

    locale, remainder, recased = _split_locale(path, config)
    # Rule 6 only applies without a query component.
    needs_slash = not sep and bool(BRAND_SECTION_RE.match(remainder))
    canonical_remainder = remainder + "/" if needs_slash else remainder

    if locale is not None:
        if needs_slash or recased:
            return RouteDecision.redirect(f"/{locale}{canonical_remainder}{suffix}")
        return RouteDecision.allow()

    if not config.enforce_locale_prefix:
        if needs_slash:
            return RouteDecision.redirect(canonical_remainder)
        # Rules 7-8
        return RouteDecision.allow()

    negotiated = negotiate_locale(
        config.locales,
        config.default_locale,
        cookie=context.locale_cookie,
        accept_language=context.accept_language,
    )
    if canonical_remainder in ("", "/"):
        return RouteDecision.redirect(f"/{negotiated}/{suffix}")
    return RouteDecision.redirect(f"/{negotiated}{canonical_remainder}{suffix}")
