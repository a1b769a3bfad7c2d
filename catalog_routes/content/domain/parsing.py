from typing import Any

from catalog_routes.content.domain.models import BRAND_REQUIRED_TYPES, ENTITY_CLASSES, ContentEntity
from catalog_routes.errors import ContentValidationError


def read_slug(value: Any) -> str | None:
    """Accept both a projected string slug and the CMS `{"_type": "slug", "current": ...}` object."""
    if value is None:
        return None
    if isinstance(value, dict):
        current = value.get("current")
        return None if current is None else str(current)
    return str(value)


def read_ref(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, dict):
        ref = value.get("_ref")
        return str(ref) if ref else None
    if isinstance(value, list):
        for item in value:
            ref = read_ref(item)
            if ref:
                return ref
        return None
    text = str(value).strip()
    return text or None


def _brand_ref(payload: dict[str, Any]) -> str | None:
    for key in ("brandRef", "brand", "primaryBrand", "relatedBrands"):
        ref = read_ref(payload.get(key))
        if ref:
            return ref
    return None


def parse_entity(content_type: str, payload: dict[str, Any]) -> ContentEntity:
    """Validate one CMS document into the variant type of *content_type*.

    `_id` is required everywhere and a brand reference is required for brand-scoped
    types. A missing slug is not a parse error; it surfaces later as a `missing` issue.
    """
    entity_cls = ENTITY_CLASSES.get(content_type)
    if entity_cls is None:
        raise ValueError(f"Unsupported content type: {content_type}")
    if not isinstance(payload, dict):
        raise ContentValidationError(content_type, None, "_id")

    doc_id = payload.get("_id") or payload.get("id")
    if not doc_id:
        raise ContentValidationError(content_type, None, "_id")

    brand_ref = None if content_type == "brand" else _brand_ref(payload)
    if content_type in BRAND_REQUIRED_TYPES and not brand_ref:
        raise ContentValidationError(content_type, str(doc_id), "brand")

    title = payload.get("title") or payload.get("name") or ""
    common: dict[str, Any] = {
        "id": str(doc_id),
        "raw_slug": read_slug(payload.get("slug")),
        "locale": payload.get("locale") or payload.get("language") or None,
        "brand_ref": brand_ref,
        "brand_slug": read_slug(payload.get("brandSlug")),
        "title": str(title),
    }
    if content_type == "brand":
        is_active = payload.get("isActive")
        return entity_cls(**common, is_active=True if is_active is None else bool(is_active))
    if content_type == "product":
        part_number = payload.get("partNumber")
        return entity_cls(**common, part_number=str(part_number) if part_number else None)
    return entity_cls(**common)
