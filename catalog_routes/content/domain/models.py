from dataclasses import dataclass
from typing import Any, ClassVar, Literal

ContentType = Literal["brand", "product", "solution", "article", "support"]

CONTENT_TYPES: tuple[ContentType, ...] = ("brand", "product", "solution", "article", "support")

# URL section under /{locale}/brands/{brand}/ for each brand-scoped content type.
SECTION_BY_TYPE: dict[str, str] = {
    "product": "products",
    "solution": "solutions",
    "support": "support",
    "article": "articles",
}

BRAND_REQUIRED_TYPES: frozenset[str] = frozenset({"product", "support"})


@dataclass(frozen=True)
class ContentKey:
    locale: str
    content_type: ContentType
    item_id: str
    brand_slug: str | None = None


@dataclass(frozen=True)
class ContentEntity:
    content_type: ClassVar[ContentType]

    id: str
    raw_slug: str | None
    locale: str | None = None
    brand_ref: str | None = None
    brand_slug: str | None = None
    title: str = ""

    @property
    def scope(self) -> str | None:
        """Uniqueness scope for slugs inside one content type."""
        return self.brand_ref

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content_type": self.content_type,
            "raw_slug": self.raw_slug,
            "locale": self.locale,
            "brand_ref": self.brand_ref,
            "brand_slug": self.brand_slug,
            "title": self.title,
        }


@dataclass(frozen=True)
class BrandEntity(ContentEntity):
    content_type: ClassVar[ContentType] = "brand"
    is_active: bool = True

    @property
    def scope(self) -> str | None:
        return None


@dataclass(frozen=True)
class ProductEntity(ContentEntity):
    content_type: ClassVar[ContentType] = "product"
    part_number: str | None = None


@dataclass(frozen=True)
class SolutionEntity(ContentEntity):
    content_type: ClassVar[ContentType] = "solution"


@dataclass(frozen=True)
class ArticleEntity(ContentEntity):
    content_type: ClassVar[ContentType] = "article"


@dataclass(frozen=True)
class SupportEntity(ContentEntity):
    content_type: ClassVar[ContentType] = "support"


ENTITY_CLASSES: dict[str, type[ContentEntity]] = {
    "brand": BrandEntity,
    "product": ProductEntity,
    "solution": SolutionEntity,
    "article": ArticleEntity,
    "support": SupportEntity,
}
