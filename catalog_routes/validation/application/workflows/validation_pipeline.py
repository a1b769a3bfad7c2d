from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from time import perf_counter
from typing import Sequence

from tqdm import tqdm

from catalog_routes.config.logger_config import logger
from catalog_routes.content.application.ports import ContentRepositoryPort
from catalog_routes.validation.application.contracts import SlugIssueRecord, ValidationReportRecord
from catalog_routes.validation.application.ports import IssueSinkPort, ValidationReportSinkPort
from catalog_routes.validation.domain.severity import HARD_ISSUES
from catalog_routes.validation.domain.validator import (
    EntityFinding,
    count_issues,
    duplicate_groups,
    inspect_entity,
    mark_duplicates,
)


@dataclass(frozen=True)
class ValidationConfig:
    content_type: str
    workers: int = 1
    show_progress: bool = True


class ValidationPipeline:
    def __init__(
        self,
        repository: ContentRepositoryPort,
        issue_sink: IssueSinkPort,
        report_sinks: Sequence[ValidationReportSinkPort],
    ) -> None:
        self.repository = repository
        self.issue_sink = issue_sink
        self.report_sinks = tuple(report_sinks)

    def run(self, config: ValidationConfig) -> ValidationReportRecord:
        started = perf_counter()
        workers = max(1, config.workers)
        try:
            entities = self.repository.list_entities(config.content_type)
            logger.info(
                "Validation pipeline started: content_type={}, entities={}, workers={}",
                config.content_type,
                len(entities),
                workers,
            )

            findings: list[EntityFinding] = []
            with ThreadPoolExecutor(max_workers=workers) as executor:
                for finding in tqdm(
                    executor.map(inspect_entity, entities),
                    total=len(entities),
                    desc=f"Validating {config.content_type} slugs",
                    unit="entity",
                    leave=True,
                    disable=not config.show_progress,
                ):
                    findings.append(finding)

            # Reduce step: needs every finding before grouping.
            groups = duplicate_groups(findings)
            marked = mark_duplicates(findings)
            rows = tuple(SlugIssueRecord.from_finding(f) for f in marked if f.issues)
            for row in rows:
                self.issue_sink.write_issue(row)
                if row.hard_issues:
                    logger.debug(
                        "Hard slug issue: content_type={}, entity_id={}, raw_slug={!r}, issues={}",
                        row.content_type,
                        row.entity_id,
                        row.raw_slug,
                        list(row.issues),
                    )
        finally:
            self.issue_sink.close()

        counts = count_issues(marked)
        hard_count = sum(n for tag, n in counts.items() if tag in HARD_ISSUES)
        soft_count = sum(n for tag, n in counts.items() if tag not in HARD_ISSUES)
        report = ValidationReportRecord(
            content_type=config.content_type,
            total_entities=len(marked),
            entities_with_issues=len(rows),
            counts=counts,
            hard_count=hard_count,
            soft_count=soft_count,
            duplicate_groups=tuple(groups),
            issues=rows,
            duration_ms=int((perf_counter() - started) * 1000),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        for sink in self.report_sinks:
            sink.write_report(report)
        logger.info(
            "Validation pipeline completed: content_type={}, duration_ms={}, total_entities={}, entities_with_issues={}, hard_count={}, soft_count={}, duplicate_groups={}, exit_code={}",
            report.content_type,
            report.duration_ms,
            report.total_entities,
            report.entities_with_issues,
            report.hard_count,
            report.soft_count,
            len(report.duplicate_groups),
            report.exit_code,
        )
        return report
