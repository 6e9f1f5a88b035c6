import json
import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import requests

from . import settings
from . import utils
from .exceptions import InvalidInputError
from .schemas import ReportEntry

logger = logging.getLogger(__name__)


def load_dataset(path: Path) -> dict[str, Any]:
    """
    Reads a dataset file holding the customers / products / sellers / purchase_records
    collections. Shape checks on the collections themselves are left to analysis.analyze.
    """
    data = utils.load_json(path)
    if data is None:
        raise InvalidInputError(f"Could not read dataset: {path}", details={"path": str(path)})
    if not isinstance(data, dict):
        raise InvalidInputError(
            f"Dataset {path.name} must be a JSON object", details={"path": str(path)}
        )
    return data


def report_to_frame(report: list[ReportEntry]) -> pd.DataFrame:
    """One row per seller, in report order. Top products live in their own frame."""
    columns = [f for f in ReportEntry.model_fields if f != "top_products"]
    rows = [entry.model_dump(exclude={"top_products"}) for entry in report]
    return pd.DataFrame(rows, columns=columns)


def top_products_to_frame(report: list[ReportEntry]) -> pd.DataFrame:
    """Long format: one row per (seller, product), rank starting at 1."""
    rows = [
        {
            "seller_id": entry.seller_id,
            "rank": rank,
            "sku": product.sku,
            "quantity": product.quantity,
        }
        for entry in report
        for rank, product in enumerate(entry.top_products, start=1)
    ]
    return pd.DataFrame(rows, columns=["seller_id", "rank", "sku", "quantity"])


def save_outputs(report: list[ReportEntry], base_name: str) -> list[Path]:
    """Saves the report to CSV (summary + top products) and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.csv"
    top_csv_path = settings.OUTPUT_DIR / f"{base_name}_top_products_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.json"

    report_to_frame(report).to_csv(csv_path, index=False)
    logger.info(f"✅ Seller report saved to: {csv_path}")

    top_products_to_frame(report).to_csv(top_csv_path, index=False)
    logger.info(f"✅ Top products saved to: {top_csv_path}")
    written = [csv_path, top_csv_path]

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = [entry.model_dump(mode="json") for entry in report]
            json.dump(json_data, f, indent=2, ensure_ascii=False)
        logger.info(f"✅ JSON output saved to: {json_path}")
        written.append(json_path)
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return written


def post_to_webhook(
    report: list[ReportEntry], metadata: Optional[dict[str, Any]] = None
) -> bool:
    """
    Posts the report AND its run metadata to the webhook.
    Returns True when the post succeeded.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting report to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportData": [entry.model_dump(mode="json") for entry in report],
        "metadata": metadata or {},
    }

    try:
        response = requests.post(
            settings.WEBHOOK_URL, json=payload, timeout=settings.WEBHOOK_TIMEOUT
        )
        response.raise_for_status()
        logger.info("✅ Report successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
