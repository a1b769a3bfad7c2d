from catalog_routes.routing.domain.models import RouteDecision

REWRITE_HEADER = "X-Rewrite-Path"
REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


def to_http_response(decision: RouteDecision, status: int = 308) -> tuple[int, dict[str, str]]:
    """Translate a routing decision into an HTTP status and headers for the edge layer."""
    if decision.action == "redirect" and decision.target:
        if status not in REDIRECT_STATUSES:
            raise ValueError(f"Not a redirect status: {status}")
        return status, {"Location": decision.target}
    if decision.action == "rewrite" and decision.target:
        return 200, {REWRITE_HEADER: decision.target}
    return 200, {}
