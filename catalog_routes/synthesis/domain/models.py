from dataclasses import dataclass, field
from typing import Any, Iterator

from catalog_routes.config.logger_config import logger
from catalog_routes.content.domain.models import SECTION_BY_TYPE, ContentKey
from catalog_routes.errors import ConfigurationError
from catalog_routes.slugs.domain.normalizer import clean_slug, is_path_safe_segment

# Content types expanded per brand during synthesis, in output order.
SYNTHESIZED_TYPES: tuple[str, ...] = ("product", "solution", "support", "article")

_TYPE_BY_SECTION = {section: content_type for content_type, section in SECTION_BY_TYPE.items()}


def _unique(values: Any) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for value in values or ():
        text = str(value).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def _routable(values: Any, kind: str, *, clean: bool = True) -> tuple[str, ...]:
    """Unique values usable as one route segment; the rest are dropped with a warning."""
    kept: list[str] = []
    for value in _unique(values):
        segment = clean_slug(value) if clean else value
        if not is_path_safe_segment(segment):
            logger.warning("Unroutable manifest value skipped: kind={}, value={!r}", kind, value)
            continue
        kept.append(segment)
    return _unique(kept)


@dataclass(frozen=True)
class SynthesisManifest:
    """Locales, brand slugs and per-type item ids that drive artifact synthesis.

    Brands and ids are cleaned on construction and values that cannot be a single path
    segment are dropped, so every tuple maps to a file under the output root. Values are
    de-duplicated, so the cross-product never repeats a tuple.
    """

    locales: tuple[str, ...]
    brands: tuple[str, ...]
    ids_by_type: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "locales", _routable(self.locales, "locale", clean=False))
        object.__setattr__(self, "brands", _routable(self.brands, "brand"))
        normalized: dict[str, tuple[str, ...]] = {}
        for content_type, ids in (self.ids_by_type or {}).items():
            key = _TYPE_BY_SECTION.get(content_type, content_type)
            if key not in SYNTHESIZED_TYPES:
                raise ConfigurationError(f"Unsupported content type in manifest: {content_type}")
            normalized[key] = _unique((*normalized.get(key, ()), *_routable(ids, key)))
        object.__setattr__(self, "ids_by_type", normalized)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SynthesisManifest":
        if not isinstance(payload, dict):
            raise ConfigurationError("Manifest must be a JSON object")
        ids = payload.get("ids") or {}
        if not isinstance(ids, dict):
            raise ConfigurationError("Manifest 'ids' must map content types to id lists")
        locales = payload.get("locales") or []
        brands = payload.get("brands") or []
        if not isinstance(locales, list) or not isinstance(brands, list):
            raise ConfigurationError("Manifest 'locales' and 'brands' must be lists")
        return cls(locales=tuple(locales), brands=tuple(brands), ids_by_type={k: tuple(v or ()) for k, v in ids.items()})

    def to_dict(self) -> dict[str, Any]:
        return {
            "locales": list(self.locales),
            "brands": list(self.brands),
            "ids": {content_type: list(ids) for content_type, ids in self.ids_by_type.items()},
        }

    def with_locales(self, locales: tuple[str, ...]) -> "SynthesisManifest":
        return SynthesisManifest(locales=locales, brands=self.brands, ids_by_type=self.ids_by_type)

    def keys(self) -> Iterator[ContentKey]:
        for locale in self.locales:
            yield from self.keys_for_locale(locale)

    def keys_for_locale(self, locale: str) -> Iterator[ContentKey]:
        for brand in self.brands:
            for content_type in SYNTHESIZED_TYPES:
                for item_id in self.ids_by_type.get(content_type, ()):
                    yield ContentKey(locale=locale, content_type=content_type, item_id=item_id, brand_slug=brand)

    @property
    def tuple_count(self) -> int:
        per_brand = sum(len(ids) for ids in self.ids_by_type.values())
        return len(self.locales) * len(self.brands) * per_brand


@dataclass(frozen=True)
class TemplateArtifact:
    content: bytes
    source: str
    degraded: bool = False
