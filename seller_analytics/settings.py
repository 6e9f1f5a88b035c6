import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Filename Configuration ---
# Datasets are expected as e.g. "sales_dataset_2025-01-31.json"
DATASET_FILENAME_PREFIX = os.getenv("DATASET_FILENAME_PREFIX", "sales_dataset_")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "seller_report")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").lower() in ("1", "true", "yes")

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
WEBHOOK_TIMEOUT = int(os.getenv("WEBHOOK_TIMEOUT", "15"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = os.getenv("LOG_FILENAME", "seller_report.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))  # 5 MB
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# --- Shared Business Logic ---
# How many best-selling SKUs are kept per seller in the report.
TOP_PRODUCTS_LIMIT = int(os.getenv("TOP_PRODUCTS_LIMIT", "10"))

# The four collections every dataset must carry, in validation order.
REQUIRED_COLLECTIONS = [
    "customers",
    "products",
    "sellers",
    "purchase_records",
]

# Bonus tiers, as a share of the seller's profit.
BONUS_MAX_RATE = float(os.getenv("BONUS_MAX_RATE", "0.15"))  # rank 0
BONUS_HIGH_RATE = float(os.getenv("BONUS_HIGH_RATE", "0.10"))  # ranks 1 and 2
BONUS_LOW_RATE = float(os.getenv("BONUS_LOW_RATE", "0.05"))  # everyone else
BONUS_MIN_RATE = float(os.getenv("BONUS_MIN_RATE", "0.0"))  # last place
