import json
from pathlib import Path
from typing import Sequence

from catalog_routes.config.logger_config import logger
from catalog_routes.content.application.ports import ContentRepositoryPort
from catalog_routes.errors import CatalogRoutesError, ConfigurationError
from catalog_routes.slugs.domain.normalizer import clean_slug
from catalog_routes.synthesis.domain.models import SYNTHESIZED_TYPES, SynthesisManifest


def _cleaned(values: Sequence[tuple[str, str | None]], label: str) -> list[str]:
    result: list[str] = []
    for entity_id, raw in values:
        cleaned = clean_slug(raw)
        if not cleaned:
            logger.warning("Slug cleans to empty, excluded from synthesis: kind={}, entity_id={}, raw={!r}", label, entity_id, raw)
            continue
        result.append(cleaned)
    return result


def build_manifest_from_repository(
    repository: ContentRepositoryPort,
    locales: Sequence[str],
    content_types: Sequence[str] = SYNTHESIZED_TYPES,
) -> SynthesisManifest:
    try:
        brand_slugs = repository.get_known_brand_slugs()
        brands = _cleaned([(slug, slug) for slug in brand_slugs], "brand")
        ids_by_type: dict[str, tuple[str, ...]] = {}
        for content_type in content_types:
            entities = repository.list_entities(content_type)
            ids_by_type[content_type] = tuple(_cleaned([(e.id, e.raw_slug) for e in entities], content_type))
    except ConfigurationError:
        raise
    except CatalogRoutesError as exc:
        raise ConfigurationError(f"Manifest could not be obtained from the content repository: {exc}") from exc

    manifest = SynthesisManifest(locales=tuple(locales), brands=tuple(brands), ids_by_type=ids_by_type)
    logger.info(
        "Manifest built from repository: locales={}, brands={}, ids={}",
        len(manifest.locales),
        len(manifest.brands),
        {k: len(v) for k, v in manifest.ids_by_type.items()},
    )
    return manifest


def load_manifest_file(path: str | Path) -> SynthesisManifest:
    manifest_path = Path(path)
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Manifest file not found: {manifest_path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Manifest file unreadable: {manifest_path}: {exc}") from exc
    return SynthesisManifest.from_dict(payload)
