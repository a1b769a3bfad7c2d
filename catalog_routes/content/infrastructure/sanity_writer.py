import requests

from catalog_routes.config.logger_config import logger
from catalog_routes.config.settings import Settings
from catalog_routes.errors import ConfigurationError, RepositoryError


class SanitySlugWriter:
    """Patches `slug.current` on a published document via the mutate API."""

    def __init__(self, project_id: str, dataset: str, api_version: str, token: str | None) -> None:
        if not project_id or not dataset:
            raise ConfigurationError("Sanity project id and dataset are required for slug repair")
        if not token:
            raise ConfigurationError("Applying slug repairs requires SANITY_API_TOKEN")
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version.lstrip("v")
        self.token = token

    @classmethod
    def from_settings(cls, settings: Settings) -> "SanitySlugWriter":
        return cls(
            project_id=settings.sanity_project_id,
            dataset=settings.sanity_dataset,
            api_version=settings.sanity_api_version,
            token=settings.sanity_token,
        )

    @property
    def mutate_url(self) -> str:
        return f"https://{self.project_id}.api.sanity.io/v{self.api_version}/data/mutate/{self.dataset}"

    def patch_slug(self, entity_id: str, slug: str) -> None:
        body = {"mutations": [{"patch": {"id": entity_id, "set": {"slug.current": slug}}}]}
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        try:
            resp = requests.post(self.mutate_url, json=body, headers=headers, timeout=30)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise RepositoryError(f"Failed to patch slug for {entity_id}: {exc}") from exc
        logger.info("Patched slug entity_id={} slug={}", entity_id, slug)
