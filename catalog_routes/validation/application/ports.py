from typing import Protocol, runtime_checkable

from catalog_routes.validation.application.contracts import (
    RepairAuditRecord,
    SlugIssueRecord,
    ValidationReportRecord,
)


@runtime_checkable
class IssueSinkPort(Protocol):
    def write_issue(self, row: SlugIssueRecord) -> None: ...
    """Write one entity row that carries at least one issue."""

    def close(self) -> None: ...
    """Release resources."""


@runtime_checkable
class ValidationReportSinkPort(Protocol):
    def write_report(self, report: ValidationReportRecord) -> None: ...
    """Persist or print the aggregate report."""


@runtime_checkable
class AuditSinkPort(Protocol):
    def write_audit(self, row: RepairAuditRecord) -> None: ...
    """Append one repair decision, applied or not."""

    def close(self) -> None: ...
