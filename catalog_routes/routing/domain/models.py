from dataclasses import dataclass
from typing import Literal

from catalog_routes.config.settings import DEFAULT_LOCALE, DEFAULT_LOCALES, Settings

RouteAction = Literal["allow", "redirect", "rewrite"]


@dataclass(frozen=True)
class RouteDecision:
    action: RouteAction
    target: str | None = None

    @classmethod
    def allow(cls) -> "RouteDecision":
        return cls(action="allow")

    @classmethod
    def redirect(cls, target: str) -> "RouteDecision":
        return cls(action="redirect", target=target)


@dataclass(frozen=True)
class RouteContext:
    """Per-request hints used for locale negotiation. No request body is ever consulted."""

    accept_language: str | None = None
    locale_cookie: str | None = None


@dataclass(frozen=True)
class RouterConfig:
    locales: tuple[str, ...] = DEFAULT_LOCALES
    default_locale: str = DEFAULT_LOCALE
    admin_root: str = "/studio"
    backoffice_prefix: str = "/admin"
    api_prefix: str = "/api"
    asset_prefixes: tuple[str, ...] = ("/_next", "/_vercel")
    enforce_locale_prefix: bool = True

    @classmethod
    def from_settings(cls, settings: Settings, *, enforce_locale_prefix: bool = True) -> "RouterConfig":
        return cls(
            locales=settings.locales,
            default_locale=settings.default_locale,
            admin_root=settings.admin_root,
            backoffice_prefix=settings.backoffice_prefix,
            api_prefix=settings.api_prefix,
            asset_prefixes=settings.asset_prefixes,
            enforce_locale_prefix=enforce_locale_prefix,
        )
