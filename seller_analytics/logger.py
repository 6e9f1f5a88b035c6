import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from . import settings

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _console_handler(level: int | str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_dir: Path, level: int | str) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / settings.LOG_FILENAME,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(
    name: str | None = None,
    log_level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """
    Configures a logger for a report run: plain messages on stdout, timestamped
    lines in a rotating file under settings.LOG_DIR. Level and directory default
    to settings. Calling it again for an already configured logger is a no-op.
    """
    level = settings.LOG_LEVEL if log_level is None else log_level
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        return logger

    logger.addHandler(_console_handler(level))
    logger.addHandler(_file_handler(log_dir or settings.LOG_DIR, level))
    return logger
