import asyncio
from typing import Any, Sequence

import aiohttp

from catalog_routes.config.logger_config import logger
from catalog_routes.config.settings import Settings
from catalog_routes.content.domain.models import CONTENT_TYPES, BrandEntity, ContentEntity
from catalog_routes.content.domain.parsing import parse_entity
from catalog_routes.content.infrastructure.cache import TtlCache
from catalog_routes.content.infrastructure.queries import GROQ_BY_TYPE, is_draft_id
from catalog_routes.content.infrastructure.sanity_client import SanityQueryClient
from catalog_routes.errors import ContentValidationError, RepositoryError


def parse_documents(content_type: str, rows: Sequence[dict[str, Any]]) -> list[ContentEntity]:
    """Parse raw documents, logging and skipping the ones that fail validation."""
    entities: list[ContentEntity] = []
    for row in rows:
        doc_id = str(row.get("_id") or "")
        if is_draft_id(doc_id):
            continue
        try:
            entities.append(parse_entity(content_type, row))
        except ContentValidationError as exc:
            logger.warning("Skipping invalid document content_type={} error={}", content_type, exc)
    return entities


def active_brand_slugs(brands: Sequence[ContentEntity]) -> list[str]:
    return [
        brand.raw_slug
        for brand in brands
        if isinstance(brand, BrandEntity) and brand.is_active and brand.raw_slug is not None
    ]


class SanityContentRepository:
    def __init__(self, client: SanityQueryClient, cache: TtlCache | None = None) -> None:
        self.client = client
        self.cache = cache

    @classmethod
    def from_settings(cls, settings: Settings, cache: TtlCache | None = None) -> "SanityContentRepository":
        client = SanityQueryClient(
            project_id=settings.sanity_project_id,
            dataset=settings.sanity_dataset,
            api_version=settings.sanity_api_version,
            token=settings.sanity_token,
        )
        return cls(client=client, cache=cache)

    def list_entities(self, content_type: str) -> list[ContentEntity]:
        if content_type not in CONTENT_TYPES:
            raise ValueError(f"Unsupported content type: {content_type}")
        cache_key = f"{self.client.dataset}:entities:{content_type}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return list(cached)

        rows = asyncio.run(self._query_async(content_type))
        if rows is None:
            raise RepositoryError(f"Sanity query failed for content_type={content_type}")
        entities = parse_documents(content_type, rows)
        logger.info(
            "Loaded entities content_type={} fetched={} valid={}",
            content_type,
            len(rows),
            len(entities),
        )
        if self.cache is not None:
            self.cache.set(cache_key, tuple(entities))
        return entities

    def get_known_brand_slugs(self) -> list[str]:
        return active_brand_slugs(self.list_entities("brand"))

    async def _query_async(self, content_type: str) -> list[dict[str, Any]] | None:
        connector = aiohttp.TCPConnector(limit=4, ttl_dns_cache=300)
        async with aiohttp.ClientSession(connector=connector) as session:
            return await self.client.query(
                session,
                GROQ_BY_TYPE[content_type],
                operation=f"list_{content_type}",
            )
