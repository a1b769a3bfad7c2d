from dataclasses import dataclass

from catalog_routes.config.logger_config import logger
from catalog_routes.synthesis.application.workflows.synthesis_pipeline import SynthesisConfig, SynthesisPipeline
from catalog_routes.synthesis.domain.models import SynthesisManifest


@dataclass(frozen=True)
class SynthesizeArtifactsCommand:
    manifest: SynthesisManifest
    out_dir: str
    redirects_source: str | None = "public/_redirects"
    workers: int = 1
    show_progress: bool = True


@dataclass(frozen=True)
class SynthesizeArtifactsResult:
    total_tuples: int
    created: int
    already_present: int
    index_created: int
    by_locale: dict[str, dict[str, int]]
    degraded: bool
    template_source: str


class SynthesizeArtifactsUseCase:
    def __init__(self, pipeline: SynthesisPipeline) -> None:
        self.pipeline = pipeline

    def execute(self, command: SynthesizeArtifactsCommand) -> SynthesizeArtifactsResult:
        logger.info(
            "Synthesis use case started: out_dir={}, tuples={}, workers={}",
            command.out_dir,
            command.manifest.tuple_count,
            command.workers,
        )
        report = self.pipeline.run(
            command.manifest,
            SynthesisConfig(
                out_dir=command.out_dir,
                redirects_source=command.redirects_source,
                workers=command.workers,
                show_progress=command.show_progress,
            ),
        )
        return SynthesizeArtifactsResult(
            total_tuples=report.total_tuples,
            created=report.created,
            already_present=report.already_present,
            index_created=report.index_created,
            by_locale={locale: counts.to_dict() for locale, counts in report.by_locale.items()},
            degraded=report.degraded,
            template_source=report.template_source,
        )
