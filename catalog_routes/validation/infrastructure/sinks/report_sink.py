import json
from pathlib import Path

from catalog_routes.config.logger_config import logger
from catalog_routes.validation.application.contracts import ValidationReportRecord
from catalog_routes.validation.application.ports import ValidationReportSinkPort


class JsonValidationReportSink(ValidationReportSinkPort):
    def __init__(self, report_path: str | Path) -> None:
        self.report_path = Path(report_path)
        self.report_path.parent.mkdir(parents=True, exist_ok=True)

    def write_report(self, report: ValidationReportRecord) -> None:
        self.report_path.write_text(
            json.dumps(report.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info("Validation report written: report_path={}", str(self.report_path))
