"""
Logging setup shared by every module.

Usage:
    from app_logging import get_logger
    logger = get_logger(__name__)
    logger.info("Fetching posts")
"""
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5


class WebzFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        iso_time = datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds")
        base = f"[{record.levelname}] {iso_time} - {record.name} - {record.getMessage()}"
        if record.exc_info:
            return f"{base}\n{self.formatException(record.exc_info)}"
        return base


def _level_from_env(default_level: int) -> int:
    lvl = os.environ.get("WEBZ_LOG_LEVEL", "").upper().strip()
    mapping = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }
    return mapping.get(lvl, default_level)


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    effective_level = _level_from_env(level)

    if not logger.handlers:
        formatter = WebzFormatter()
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

        log_file = os.environ.get("WEBZ_LOG_FILE", "webzAPI.log")
        if log_file:
            file_handler = RotatingFileHandler(
                log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, delay=True
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        logger.propagate = False

    logger.setLevel(effective_level)
    for h in logger.handlers:
        h.setLevel(effective_level)
    return logger
