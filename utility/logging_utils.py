# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: logging_utils.py
# -----------------------------------------------------------------------------
"""
Project loggers: everything lives under the ``kb_rag_llm`` namespace.

Environment:
    KB_LOG_LEVEL         DEBUG | INFO | WARNING | ... (default INFO)
    KB_LOG_TO_FILE       1/true/yes to also write a rotating file (default off)
    KB_LOG_FILE          file path (default ./logs/kb_rag_llm.log)
    KB_LOG_MAX_BYTES     rotate size (default 5MB)
    KB_LOG_BACKUP_COUNT  rotated files kept (default 5)
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import colorlog

BASE_LOGGER_NAME = "kb_rag_llm"

CONSOLE_FORMAT = (
    "%(log_color)s%(asctime)s [%(levelname)s] "
    "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
)
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}
MESSAGE_COLORS = {
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "light_red",
    "CRITICAL": "red",
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "y")


def _level() -> int:
    return getattr(logging, os.getenv("KB_LOG_LEVEL", "INFO").strip().upper(), logging.INFO)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        fmt=CONSOLE_FORMAT,
        datefmt=DATE_FORMAT,
        log_colors=LEVEL_COLORS,
        secondary_log_colors={"message": MESSAGE_COLORS},
        style="%",
    ))
    return handler


def _file_handler() -> Optional[logging.Handler]:
    # opt-in so test runs don't litter ./logs
    if not _env_flag("KB_LOG_TO_FILE", "0"):
        return None

    log_path = Path(os.getenv("KB_LOG_FILE", f"./logs/{BASE_LOGGER_NAME}.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=int(os.getenv("KB_LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("KB_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    """Configure handlers once per logger name; later calls return it untouched."""
    logger = logging.getLogger(full_name)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    file_handler = _file_handler()
    if file_handler is not None:
        logger.addHandler(file_handler)

    logger.setLevel(_level())
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Logger named after module + class, e.g.
    ``kb_rag_llm.services.KBSearchService.KBSearchService``.
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _create_logger(f"{BASE_LOGGER_NAME}.{module}.{classname}")
