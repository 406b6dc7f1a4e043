"""
Logging setup for applications embedding the loaders.

Usage:
    from core.logging_setup import setup_logging

    setup_logging(log_level="DEBUG", log_file="logs/dataloader.log")
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_MARK = "_dataloader_handler"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure console (and optional rotating file) logging on the root logger.

    Calling it again replaces the handlers it installed before, so repeated
    setup does not duplicate output.

    Args:
        log_level: Minimum level to log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. None means console only
        max_bytes: Max size per log file before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        The configured root logger
    """
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()

    sh = logging.StreamHandler()
    sh.setFormatter(formatter)
    setattr(sh, _HANDLER_MARK, True)
    root_logger.addHandler(sh)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setFormatter(formatter)
        setattr(fh, _HANDLER_MARK, True)
        root_logger.addHandler(fh)

    return root_logger
