from pathlib import Path
from typing import TextIO

from catalog_routes.config.settings import Settings
from catalog_routes.content.application.ports import ContentRepositoryPort, SlugWriterPort
from catalog_routes.validation.application.use_cases.repair_slugs import (
    RepairSlugsCommand,
    RepairSlugsResult,
    RepairSlugsUseCase,
)
from catalog_routes.validation.application.use_cases.validate_slugs import (
    ValidateSlugsCommand,
    ValidateSlugsResult,
    ValidateSlugsUseCase,
)
from catalog_routes.validation.application.workflows.validation_pipeline import ValidationPipeline
from catalog_routes.validation.infrastructure.sinks.console_sink import ConsoleReportSink
from catalog_routes.validation.infrastructure.sinks.jsonl_sink import JsonlAuditSink, JsonlIssueSink
from catalog_routes.validation.infrastructure.sinks.report_sink import JsonValidationReportSink


def run_validate(
    content_type: str,
    repository: ContentRepositoryPort,
    *,
    report_path: str | Path | None = None,
    issues_path: str | Path | None = None,
    workers: int | None = None,
    stream: TextIO | None = None,
    show_progress: bool = True,
    settings: Settings | None = None,
) -> ValidateSlugsResult:
    settings = settings or Settings.from_env()
    artifacts_dir = Path(settings.artifacts_dir)
    issue_sink = JsonlIssueSink(issues_path or artifacts_dir / f"slug_issues_{content_type}.jsonl")
    report_sinks = [
        ConsoleReportSink(stream=stream),
        JsonValidationReportSink(report_path or artifacts_dir / f"slug_report_{content_type}.json"),
    ]
    pipeline = ValidationPipeline(repository=repository, issue_sink=issue_sink, report_sinks=report_sinks)
    use_case = ValidateSlugsUseCase(pipeline=pipeline)
    try:
        return use_case.execute(
            ValidateSlugsCommand(
                content_type=content_type,
                workers=workers or settings.workers,
                show_progress=show_progress,
            )
        )
    finally:
        issue_sink.close()


def run_repair(
    content_type: str,
    repository: ContentRepositoryPort,
    *,
    apply: bool = False,
    writer: SlugWriterPort | None = None,
    audit_path: str | Path | None = None,
    settings: Settings | None = None,
) -> RepairSlugsResult:
    settings = settings or Settings.from_env()
    audit_sink = JsonlAuditSink(audit_path or Path(settings.artifacts_dir) / "slug_repair_audit.jsonl")
    use_case = RepairSlugsUseCase(repository=repository, audit_sink=audit_sink, writer=writer)
    try:
        return use_case.execute(RepairSlugsCommand(content_type=content_type, apply=apply))
    finally:
        audit_sink.close()
