from typing import Protocol, Sequence, runtime_checkable

from catalog_routes.content.domain.models import ContentEntity


@runtime_checkable
class ContentRepositoryPort(Protocol):
    def list_entities(self, content_type: str) -> Sequence[ContentEntity]: ...
    """Return every published entity of *content_type*, validated into its variant type."""

    def get_known_brand_slugs(self) -> Sequence[str]: ...
    """Return the raw slugs of every active brand."""


@runtime_checkable
class SlugWriterPort(Protocol):
    def patch_slug(self, entity_id: str, slug: str) -> None: ...
    """Write a repaired slug back to the CMS. Only the audited repair use case calls this."""
