"""Content entities and keys shared by every engine component."""

from catalog_routes.content.domain.models import (
    CONTENT_TYPES,
    SECTION_BY_TYPE,
    ArticleEntity,
    BrandEntity,
    ContentEntity,
    ContentKey,
    ContentType,
    ProductEntity,
    SolutionEntity,
    SupportEntity,
)
from catalog_routes.content.domain.parsing import parse_entity

__all__ = [
    "ArticleEntity",
    "BrandEntity",
    "CONTENT_TYPES",
    "ContentEntity",
    "ContentKey",
    "ContentType",
    "parse_entity",
    "ProductEntity",
    "SECTION_BY_TYPE",
    "SolutionEntity",
    "SupportEntity",
]
