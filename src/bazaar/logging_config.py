"""Logging configuration for the browser harness.

Every run writes a timestamped log next to its screenshots, so a failure
screenshot and the log lines leading up to it end up in the same build
directory::

    build/screenshots/navigation_challenge_20260101_120000.png
    build/logs/bazaar_20260101_115958.log
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
RUN_LOG_DIR = "logs"


def run_log_path(screenshot_dir: Union[str, Path], started: Optional[datetime] = None) -> Path:
    """Run log beside ``screenshot_dir``: build/screenshots -> build/logs/bazaar_<ts>.log"""
    started = started or datetime.now()
    return Path(screenshot_dir).parent / RUN_LOG_DIR / f"bazaar_{started:%Y%m%d_%H%M%S}.log"


def _file_handler(log_file: Union[str, Path], format_string: str) -> logging.FileHandler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None
) -> None:
    """Configure logging for harness runs.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path; parent directories are created
        format_string: Optional custom format string
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(_file_handler(log_file, format_string))

    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    # The weather client's transport is chatty at DEBUG
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)


def attach_run_log(
    screenshot_dir: Union[str, Path],
    level: str = "INFO",
    started: Optional[datetime] = None,
) -> logging.FileHandler:
    """
    Add a run log file handler to the root logger without replacing others.

    Used under pytest, whose own capture handlers must stay installed. The
    root level is lowered to ``level`` if needed so records reach the file.
    Detach with ``detach_run_log``.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handler = _file_handler(run_log_path(screenshot_dir, started), DEFAULT_FORMAT)
    handler.setLevel(numeric_level)

    root = logging.getLogger()
    if root.level > numeric_level:
        root.setLevel(numeric_level)
    root.addHandler(handler)
    return handler


def detach_run_log(handler: logging.FileHandler) -> None:
    logging.getLogger().removeHandler(handler)
    handler.close()


def log_banner(
    logger: logging.Logger,
    *lines: str,
    level: int = logging.INFO,
    width: int = 60,
) -> None:
    """Log ``lines`` inside a box so test boundaries stand out in long runs."""
    logger.log(level, "╔" + "═" * width + "╗")
    for line in lines:
        logger.log(level, f"║  {line}")
    logger.log(level, "╚" + "═" * width + "╝")
