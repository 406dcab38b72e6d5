"""
Logging Configuration

Console logging at the configured level plus an optional dated DEBUG log
file under ``<data_dir>/logs``. All service loggers live under the
``evidence_analyzer`` namespace.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from config.settings import settings

ROOT_LOGGER = "evidence_analyzer"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Provider SDKs and HTTP clients log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "LiteLLM")


def _build_handlers(level: str, log_to_file: bool) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level.upper())
    handlers: list[logging.Handler] = [console]

    if log_to_file:
        log_file = settings.logs_dir / f"{ROOT_LOGGER}_{datetime.now():%Y%m%d}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(log_level: Optional[str] = None, log_to_file: Optional[bool] = None) -> logging.Logger:
    """
    Configure logging for the application.

    Safe to call more than once: existing root handlers are replaced.

    Args:
        log_level: Console level (defaults to LOG_LEVEL)
        log_to_file: Whether to also log to a file (defaults to LOG_TO_FILE)

    Returns:
        The service's top-level logger
    """
    level = log_level or settings.log_level
    to_file = settings.log_to_file if log_to_file is None else log_to_file

    logging.basicConfig(level=logging.DEBUG, handlers=_build_handlers(level, to_file), force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger(ROOT_LOGGER)
