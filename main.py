import argparse
import sys
from pathlib import Path

from seller_analytics.logger import setup_logger
from seller_analytics.pipelines.seller_report import SellerReportPipeline


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the seller performance report.")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Dataset JSON file. Defaults to the newest dataset in INPUT_DIR.",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Test mode: save outputs but skip the webhook post.",
    )
    return parser.parse_args(argv)


def run_process(argv=None) -> int:
    """Main orchestration function to run the entire reporting process."""
    args = parse_args(argv)
    logger = setup_logger()

    logger.info("--- Starting Seller Performance Report Process ---")
    report = SellerReportPipeline(dataset_path=args.input, test_mode=args.test).run()

    if report is None:
        logger.error("❌ No report produced.")
        return 1

    logger.info("\n--- Process Finished Successfully ---")
    return 0


if __name__ == "__main__":
    sys.exit(run_process())
