import sys
from typing import TextIO

from catalog_routes.validation.application.contracts import ValidationReportRecord
from catalog_routes.validation.application.ports import ValidationReportSinkPort


class ConsoleReportSink(ValidationReportSinkPort):
    """Human-readable report on stdout, the part CI logs show."""

    def __init__(self, stream: TextIO | None = None, max_rows: int | None = None) -> None:
        self.stream = stream
        self.max_rows = max_rows

    def write_report(self, report: ValidationReportRecord) -> None:
        out = self.stream or sys.stdout
        status = "FAIL" if report.exit_code else "PASS"
        out.write(f"Slug validation [{report.content_type}]: {status}\n")
        out.write(
            f"  entities={report.total_entities} with_issues={report.entities_with_issues} "
            f"hard={report.hard_count} soft={report.soft_count}\n"
        )
        out.write("  counts: " + ", ".join(f"{tag}={n}" for tag, n in report.counts.items()) + "\n")

        for group in report.duplicate_groups:
            scope = group.scope or "-"
            out.write(f"  duplicate '{group.slug_key}' (scope {scope}): {', '.join(group.entity_ids)}\n")

        rows = report.issues if self.max_rows is None else report.issues[: self.max_rows]
        for row in rows:
            level = "HARD" if row.hard_issues else "soft"
            out.write(f"  [{level}] {row.entity_id} {row.raw_slug!r}: {', '.join(row.issues)}\n")
        hidden = len(report.issues) - len(rows)
        if hidden > 0:
            out.write(f"  ... {hidden} more row(s) in the issues file\n")
        out.flush()
