"""Logging configuration with a rotating log file."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from annotated_image import config
from annotated_image.utils.paths import get_log_dir


def setup_logging(
    level: Union[int, str, None] = None, log_dir: Optional[Path] = None
) -> Path:
    """
    Configure the package logger.

    Writes DEBUG and above to ``annotated_image.log`` (5 MB per file,
    3 rotations) and ``level`` and above to stdout.

    Args:
        level: Console log level, defaults to ``config.LOG_LEVEL``
        log_dir: Directory for the log file, defaults to the per-user log dir

    Returns:
        Path to the log file
    """
    if level is None:
        level = config.LOG_LEVEL
    if log_dir is None:
        log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    detailed_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)-8s | %(name)s | %(message)s")

    package_logger = logging.getLogger("annotated_image")
    package_logger.setLevel(logging.DEBUG)
    package_logger.handlers.clear()

    log_path = log_dir / "annotated_image.log"
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    package_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_formatter)
    package_logger.addHandler(console_handler)

    # Pointer moves log at DEBUG on every event
    logging.getLogger("annotated_image.controllers").setLevel(logging.INFO)

    log = logging.getLogger(__name__)
    log.info("%s logging initialized, log file: %s", config.APP_NAME, log_path)
    return log_path
