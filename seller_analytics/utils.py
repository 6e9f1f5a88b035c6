import json
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Matches the trailing date in names like "sales_dataset_2025-01-31.json"
FILENAME_DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})\.json$")


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def find_latest_report(directory: Path, prefix: str) -> tuple[Path, date] | None:
    """
    Finds the newest '<prefix>YYYY-MM-DD.json' file in `directory`.
    Files whose name carries no parseable date are ignored.
    Returns (path, file_date) or None when nothing matches.
    """
    if not directory.exists():
        logger.warning(f"Input directory not found: {directory}")
        return None

    candidates = []
    for path in directory.glob(f"{prefix}*.json"):
        match = FILENAME_DATE_PATTERN.search(path.name)
        if not match:
            continue
        try:
            file_date = datetime.strptime(match.group(1), "%Y-%m-%d").date()
        except ValueError:
            continue
        candidates.append((file_date, path))

    if not candidates:
        return None

    file_date, path = max(candidates)
    return path, file_date


def load_json(file_path: Path) -> Any | None:
    """
    Reads a JSON file, trying UTF-8 (with BOM support) first and latin-1 second.
    Returns None when the file is missing or cannot be parsed.
    """
    try:
        # Attempt 1: the most common and correct encoding first.
        return json.loads(file_path.read_text(encoding="utf-8-sig"))

    except UnicodeDecodeError:
        logger.info(
            f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return json.loads(file_path.read_text(encoding="latin-1"))
        except json.JSONDecodeError as e_latin1:
            logger.error(
                f"Could not parse {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"Dataset not found at {file_path}, skipping.")
        return None

    except json.JSONDecodeError as e_json:
        logger.error(f"{file_path.name} is not valid JSON. Reason: {e_json}")
        return None
