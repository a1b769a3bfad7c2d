from pathlib import Path
from typing import Sequence

from catalog_routes.config.logger_config import logger
from catalog_routes.config.settings import Settings
from catalog_routes.content.application.ports import ContentRepositoryPort
from catalog_routes.errors import ConfigurationError
from catalog_routes.synthesis.application.manifest_builder import build_manifest_from_repository, load_manifest_file
from catalog_routes.synthesis.application.use_cases.synthesize_artifacts import (
    SynthesizeArtifactsCommand,
    SynthesizeArtifactsResult,
    SynthesizeArtifactsUseCase,
)
from catalog_routes.synthesis.application.workflows.synthesis_pipeline import SynthesisPipeline
from catalog_routes.synthesis.domain.models import SynthesisManifest
from catalog_routes.synthesis.infrastructure.fs_sink import StaticTreeWriter
from catalog_routes.synthesis.infrastructure.manifest_store import SQLiteManifestStore
from catalog_routes.synthesis.infrastructure.report_sink import JsonSynthesisReportSink
from catalog_routes.synthesis.infrastructure.template_locator import locate_template


def resolve_manifest(
    *,
    settings: Settings,
    manifest: SynthesisManifest | None = None,
    manifest_path: str | Path | None = None,
    repository: ContentRepositoryPort | None = None,
    locales: Sequence[str] | None = None,
) -> SynthesisManifest:
    """Pick the manifest source: explicit object, JSON file, then content repository.

    `locales` overrides whatever the source declares. A file without locales falls back
    to the configured ones.
    """
    if manifest is None and manifest_path is not None:
        manifest = load_manifest_file(manifest_path)
    if manifest is None and repository is not None:
        manifest = build_manifest_from_repository(repository, locales or settings.locales)
    if manifest is None:
        raise ConfigurationError("No manifest source given (manifest file, export file or CMS)")
    if locales:
        manifest = manifest.with_locales(tuple(locales))
    elif not manifest.locales:
        manifest = manifest.with_locales(settings.locales)
    return manifest


def run_synthesize(
    out_dir: str | Path | None = None,
    *,
    manifest: SynthesisManifest | None = None,
    manifest_path: str | Path | None = None,
    repository: ContentRepositoryPort | None = None,
    locales: Sequence[str] | None = None,
    workers: int | None = None,
    allow_fallback: bool = True,
    report_path: str | Path | None = None,
    manifest_db_path: str | Path | None = None,
    show_progress: bool = True,
    settings: Settings | None = None,
) -> SynthesizeArtifactsResult:
    settings = settings or Settings.from_env()
    out_path = Path(out_dir or settings.output_dir)
    artifacts_dir = Path(settings.artifacts_dir)
    resolved = resolve_manifest(
        settings=settings,
        manifest=manifest,
        manifest_path=manifest_path,
        repository=repository,
        locales=locales,
    )

    template = locate_template(
        settings.template_candidates,
        out_dir=out_path,
        default_locale=settings.default_locale,
        allow_fallback=allow_fallback,
    )
    writer = StaticTreeWriter(out_path)
    report_sink = JsonSynthesisReportSink(report_path or artifacts_dir / "synthesis_report.json")

    db_path = Path(manifest_db_path or artifacts_dir / "artifact_manifest.db")
    manifest_store, recovered, recovered_from = SQLiteManifestStore.create_with_recovery(db_path)
    if recovered:
        logger.warning("Artifact manifest DB recovered: db_path={}, recovered_from={}", str(db_path), recovered_from)

    pipeline = SynthesisPipeline(
        writer=writer,
        template=template,
        report_sink=report_sink,
        manifest_store=manifest_store,
    )
    use_case = SynthesizeArtifactsUseCase(pipeline=pipeline)
    return use_case.execute(
        SynthesizeArtifactsCommand(
            manifest=resolved,
            out_dir=str(out_path),
            redirects_source=settings.redirects_source,
            workers=workers or settings.workers,
            show_progress=show_progress,
        )
    )
