from dataclasses import dataclass
from typing import Any, Literal

from catalog_routes.content.domain.models import ContentKey

ArtifactOrigin = Literal["build", "synthesized"]


@dataclass(frozen=True)
class ArtifactEntry:
    content_key: ContentKey
    file_path: str
    origin: ArtifactOrigin

    def to_dict(self) -> dict[str, Any]:
        return {
            "locale": self.content_key.locale,
            "content_type": self.content_key.content_type,
            "brand_slug": self.content_key.brand_slug,
            "item_id": self.content_key.item_id,
            "file_path": self.file_path,
            "origin": self.origin,
        }


@dataclass(frozen=True)
class LocaleCounts:
    created: int = 0
    already_present: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"created": self.created, "already_present": self.already_present}


@dataclass(frozen=True)
class SynthesisReportRecord:
    out_dir: str
    total_tuples: int
    created: int
    already_present: int
    index_created: int
    by_locale: dict[str, LocaleCounts]
    template_source: str
    degraded: bool
    redirects_copied: bool
    missing_paths: tuple[str, ...]
    duration_ms: int
    generated_at: str

    @property
    def verified(self) -> bool:
        return not self.missing_paths

    def to_dict(self) -> dict[str, Any]:
        return {
            "out_dir": self.out_dir,
            "total_tuples": self.total_tuples,
            "created": self.created,
            "already_present": self.already_present,
            "index_created": self.index_created,
            "by_locale": {locale: counts.to_dict() for locale, counts in self.by_locale.items()},
            "template_source": self.template_source,
            "degraded": self.degraded,
            "redirects_copied": self.redirects_copied,
            "verified": self.verified,
            "missing_paths": list(self.missing_paths),
            "duration_ms": self.duration_ms,
            "generated_at": self.generated_at,
        }
