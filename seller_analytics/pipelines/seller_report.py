import logging
from pathlib import Path
from typing import Any, Optional

from seller_analytics import data_handler, settings, utils
from seller_analytics.analysis import analyze
from seller_analytics.exceptions import SalesAnalysisError
from seller_analytics.pipeline import DataPipeline
from seller_analytics.policies import DEFAULT_OPTIONS
from seller_analytics.schemas import ReportEntry

logger = logging.getLogger(__name__)


class SellerReportPipeline(DataPipeline):
    def __init__(
        self,
        dataset_path: Optional[Path] = None,
        options: Optional[dict[str, Any]] = None,
        test_mode: bool = False,
    ):
        super().__init__("seller", test_mode=test_mode)
        # Explicit dataset wins; otherwise the newest file in INPUT_DIR is used
        self.dataset_path = dataset_path
        self.options = options if options is not None else dict(DEFAULT_OPTIONS)

    def extract(self) -> dict[str, Any] | None:
        logger.info("--- Locating Sales Dataset ---")

        if self.dataset_path is not None:
            path, file_date = self.dataset_path, None
        else:
            found_info = utils.find_latest_report(
                settings.INPUT_DIR, settings.DATASET_FILENAME_PREFIX
            )
            if not found_info:
                logger.warning(
                    f"  > ⚠️  No dataset found ({settings.DATASET_FILENAME_PREFIX}*.json in {settings.INPUT_DIR})."
                )
                return None
            path, file_date = found_info

        logger.info(f"  > Found: {path.name} (File Date: {file_date or 'n/a'})")
        self.status_summary["source"] = path.name
        self.status_summary["data_date"] = file_date.isoformat() if file_date else None

        try:
            data = data_handler.load_dataset(path)
        except SalesAnalysisError as e:
            logger.error(f"❌ {e.message}")
            return None

        for name in settings.REQUIRED_COLLECTIONS:
            collection = data.get(name)
            count = len(collection) if isinstance(collection, (list, tuple)) else None
            logger.info(f"    - {name}: {count if count is not None else 'missing'}")
        return data

    def transform(self, raw_data: dict[str, Any]) -> list[ReportEntry] | None:
        logger.info("\n--- Building Seller Report ---")
        try:
            report = analyze(raw_data, self.options)
        except SalesAnalysisError as e:
            logger.error(f"❌ Analysis failed [{e.code}]: {e.message}")
            if e.details:
                logger.error(e.details)
            return None

        self.status_summary["sellers"] = len(report)
        logger.info(f"✅ Report built ({len(report)} sellers).")
        logger.info(data_handler.report_to_frame(report).to_string(index=False))
        return report

    def output_basename(self) -> str:
        return settings.REPORT_FILENAME_BASE
