import json
from pathlib import Path

from catalog_routes.config.logger_config import logger
from catalog_routes.synthesis.application.contracts import SynthesisReportRecord
from catalog_routes.synthesis.application.ports import SynthesisReportSinkPort


class JsonSynthesisReportSink(SynthesisReportSinkPort):
    def __init__(self, report_path: str | Path) -> None:
        self.report_path = Path(report_path)
        self.report_path.parent.mkdir(parents=True, exist_ok=True)

    def write_report(self, report: SynthesisReportRecord) -> None:
        self.report_path.write_text(
            json.dumps(report.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info("Synthesis report written: report_path={}", str(self.report_path))
