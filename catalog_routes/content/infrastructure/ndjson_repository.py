import json
from pathlib import Path
from typing import Any

from catalog_routes.config.logger_config import logger
from catalog_routes.content.domain.models import CONTENT_TYPES, ContentEntity
from catalog_routes.content.domain.parsing import read_ref, read_slug
from catalog_routes.content.infrastructure.queries import DOCUMENT_TYPES, is_draft_id
from catalog_routes.content.infrastructure.sanity_repository import active_brand_slugs, parse_documents
from catalog_routes.errors import ConfigurationError, RepositoryError


class NdjsonContentRepository:
    """Content repository over a dataset export, one JSON document per line.

    Documents are read once and kept in memory. Brand references are resolved to brand
    slugs here, which the query API does with `->` projections.
    """

    def __init__(self, export_path: str | Path) -> None:
        self.export_path = Path(export_path)
        if not self.export_path.exists():
            raise ConfigurationError(f"Export file not found: {self.export_path}")
        self._documents: list[dict[str, Any]] | None = None

    def list_entities(self, content_type: str) -> list[ContentEntity]:
        if content_type not in CONTENT_TYPES:
            raise ValueError(f"Unsupported content type: {content_type}")
        doc_type = DOCUMENT_TYPES[content_type]
        documents = self._load()
        brand_slugs = self._brand_slugs_by_id(documents)

        rows: list[dict[str, Any]] = []
        for doc in documents:
            if doc.get("_type") != doc_type:
                continue
            row = self._project(content_type, doc, brand_slugs)
            if content_type == "support" and not row.get("brandRef"):
                continue
            rows.append(row)
        rows.sort(key=lambda row: str(row.get("_id") or ""))
        return parse_documents(content_type, rows)

    def get_known_brand_slugs(self) -> list[str]:
        return active_brand_slugs(self.list_entities("brand"))

    def _load(self) -> list[dict[str, Any]]:
        if self._documents is not None:
            return self._documents
        documents: list[dict[str, Any]] = []
        try:
            with self.export_path.open("r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        doc = json.loads(line)
                    except json.JSONDecodeError as exc:
                        logger.warning("Skipping malformed export line path={} line={} error={}", self.export_path, line_no, exc)
                        continue
                    if not isinstance(doc, dict) or is_draft_id(str(doc.get("_id") or "")):
                        continue
                    documents.append(doc)
        except OSError as exc:
            raise RepositoryError(f"Failed to read export {self.export_path}: {exc}") from exc
        logger.info("Loaded export path={} documents={}", self.export_path, len(documents))
        self._documents = documents
        return documents

    @staticmethod
    def _brand_slugs_by_id(documents: list[dict[str, Any]]) -> dict[str, str]:
        slugs: dict[str, str] = {}
        for doc in documents:
            if doc.get("_type") != DOCUMENT_TYPES["brand"]:
                continue
            slug = read_slug(doc.get("slug"))
            if doc.get("_id") and slug is not None:
                slugs[str(doc["_id"])] = slug
        return slugs

    @staticmethod
    def _project(content_type: str, doc: dict[str, Any], brand_slugs: dict[str, str]) -> dict[str, Any]:
        row = dict(doc)
        if content_type == "brand":
            row.setdefault("title", doc.get("name"))
            return row
        if content_type == "product":
            brand_ref = read_ref(doc.get("brand"))
        elif content_type == "solution":
            brand_ref = read_ref(doc.get("primaryBrand")) or read_ref(doc.get("relatedBrands"))
        else:
            brand_ref = read_ref(doc.get("relatedBrands"))
        row["brandRef"] = brand_ref
        if brand_ref and "brandSlug" not in row:
            row["brandSlug"] = brand_slugs.get(brand_ref)
        return row
