import json
from pathlib import Path

from catalog_routes.config.logger_config import logger
from catalog_routes.validation.application.contracts import RepairAuditRecord, SlugIssueRecord
from catalog_routes.validation.application.ports import AuditSinkPort, IssueSinkPort


class JsonlIssueSink(IssueSinkPort):
    def __init__(self, issues_path: str | Path) -> None:
        issues_file = Path(issues_path)
        issues_file.parent.mkdir(parents=True, exist_ok=True)
        self.issues_path = issues_file
        self.row_count = 0
        self._fp = issues_file.open("w", encoding="utf-8")
        logger.info("Issue sink initialized: issues_path={}", str(issues_file))

    def write_issue(self, row: SlugIssueRecord) -> None:
        self._fp.write(json.dumps(row.to_dict(), ensure_ascii=False) + "\n")
        self.row_count += 1

    def close(self) -> None:
        if self._fp.closed:
            return
        self._fp.close()
        logger.info("Issue sink closed: issues_path={}, row_count={}", str(self.issues_path), self.row_count)


class JsonlAuditSink(AuditSinkPort):
    """Append-only repair log; earlier runs are never truncated."""

    def __init__(self, audit_path: str | Path) -> None:
        audit_file = Path(audit_path)
        audit_file.parent.mkdir(parents=True, exist_ok=True)
        self.audit_path = audit_file
        self._fp = audit_file.open("a", encoding="utf-8")
        logger.info("Audit sink initialized: audit_path={}", str(audit_file))

    def write_audit(self, row: RepairAuditRecord) -> None:
        self._fp.write(json.dumps(row.to_dict(), ensure_ascii=False) + "\n")
        self._fp.flush()

    def close(self) -> None:
        if not self._fp.closed:
            self._fp.close()
