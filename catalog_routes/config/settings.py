# Runtime configuration read from the environment (and an optional .env file).

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_LOCALES: tuple[str, ...] = ("zh-CN", "zh-TW", "en", "ja", "ko", "de", "fr", "es", "ru", "ar")
DEFAULT_LOCALE = "zh-CN"

DEFAULT_TEMPLATE_CANDIDATES: tuple[str, ...] = (
    "{out}/index.html",
    ".next/server/app/index.html",
    ".next/server/pages/index.html",
    "{out}/{default_locale}/index.html",
)


def _split(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


def _int(value: str | None, default: int) -> int:
    try:
        return int(value) if value else default
    except ValueError:
        return default


def _float(value: str | None, default: float) -> float:
    try:
        return float(value) if value else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    locales: tuple[str, ...] = DEFAULT_LOCALES
    default_locale: str = DEFAULT_LOCALE
    admin_root: str = "/studio"
    backoffice_prefix: str = "/admin"
    api_prefix: str = "/api"
    asset_prefixes: tuple[str, ...] = ("/_next", "/_vercel")

    sanity_project_id: str | None = None
    sanity_dataset: str = "production"
    sanity_api_version: str = "2023-05-03"
    sanity_token: str | None = None

    output_dir: str = "out"
    template_candidates: tuple[str, ...] = DEFAULT_TEMPLATE_CANDIDATES
    redirects_source: str = "public/_redirects"
    cache_max_size: int = 1000
    cache_ttl_seconds: float = 300.0
    workers: int = 1
    artifacts_dir: str = "artifacts/catalog"

    @classmethod
    def from_env(cls) -> "Settings":
        locales = _split(os.getenv("CATALOG_LOCALES"), DEFAULT_LOCALES)
        default_locale = os.getenv("CATALOG_DEFAULT_LOCALE", DEFAULT_LOCALE)
        if default_locale not in locales:
            locales = (default_locale, *locales)
        return cls(
            locales=locales,
            default_locale=default_locale,
            admin_root=os.getenv("CATALOG_ADMIN_ROOT", "/studio"),
            backoffice_prefix=os.getenv("CATALOG_BACKOFFICE_PREFIX", "/admin"),
            api_prefix=os.getenv("CATALOG_API_PREFIX", "/api"),
            asset_prefixes=_split(os.getenv("CATALOG_ASSET_PREFIXES"), ("/_next", "/_vercel")),
            sanity_project_id=os.getenv("SANITY_PROJECT_ID") or None,
            sanity_dataset=os.getenv("SANITY_DATASET", "production"),
            sanity_api_version=os.getenv("SANITY_API_VERSION", "2023-05-03"),
            sanity_token=os.getenv("SANITY_API_TOKEN") or None,
            output_dir=os.getenv("CATALOG_OUTPUT_DIR", "out"),
            template_candidates=_split(os.getenv("CATALOG_TEMPLATE_CANDIDATES"), DEFAULT_TEMPLATE_CANDIDATES),
            redirects_source=os.getenv("CATALOG_REDIRECTS_SOURCE", "public/_redirects"),
            cache_max_size=_int(os.getenv("CATALOG_CACHE_MAX_SIZE"), 1000),
            cache_ttl_seconds=_float(os.getenv("CATALOG_CACHE_TTL_SECONDS"), 300.0),
            workers=max(1, _int(os.getenv("CATALOG_WORKERS"), 1)),
            artifacts_dir=os.getenv("CATALOG_ARTIFACTS_DIR", "artifacts/catalog"),
        )
