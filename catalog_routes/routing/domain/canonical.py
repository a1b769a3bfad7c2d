from dataclasses import dataclass
from pathlib import Path

from catalog_routes.content.domain.models import SECTION_BY_TYPE, ContentKey
from catalog_routes.slugs.domain.normalizer import encode_segment, is_path_safe_segment


@dataclass(frozen=True)
class CanonicalRoute:
    segments: tuple[str, ...]
    trailing_slash: bool = True

    def to_path(self) -> str:
        path = "/" + "/".join(encode_segment(s) for s in self.segments)
        if self.trailing_slash and self.segments:
            path += "/"
        return path

    def to_file_path(self, root: str | Path) -> Path:
        """`root/<segments...>/index.html`; raises `ValueError` for a path that would leave *root*."""
        for segment in self.segments:
            if not is_path_safe_segment(segment):
                raise ValueError(f"Route segment is not a safe directory name: {segment!r}")
        base = Path(root)
        path = base.joinpath(*self.segments, "index.html")
        if not path.resolve().is_relative_to(base.resolve()):
            raise ValueError(f"Route file path escapes the output root: {path}")
        return path


def canonical_route(key: ContentKey) -> CanonicalRoute:
    """Map a content key to its one canonical route.

    Segments are expected to be cleaned already; an empty segment is a caller bug.
    """
    if not key.locale:
        raise ValueError("ContentKey.locale is required")
    if key.content_type == "brand":
        brand = key.brand_slug or key.item_id
        if not brand:
            raise ValueError("brand key requires a brand slug")
        return CanonicalRoute(segments=(key.locale, "brands", brand))

    if not key.item_id:
        raise ValueError(f"{key.content_type} key requires an item id")
    section = SECTION_BY_TYPE[key.content_type]
    if key.brand_slug:
        return CanonicalRoute(segments=(key.locale, "brands", key.brand_slug, section, key.item_id))
    # Only articles have an unbranded route.
    if key.content_type != "article":
        raise ValueError(f"{key.content_type} key requires a brand slug")
    return CanonicalRoute(segments=(key.locale, section, key.item_id))
