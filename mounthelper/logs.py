# mounthelper/logs.py - Log file setup
"""
Rotating log file for the mount helper.

Every module logs through a child of the "mounthelper" logger. The log
lives next to the config file so users can attach it to bug reports.
Passwords are never passed to any logger.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from mounthelper.constants import Branding
from mounthelper.limits import Limits
from mounthelper.paths import Paths

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Optional[Path] = None, debug: bool = False) -> logging.Logger:
    """
    Set up the rotating log file (and a stderr handler in debug mode).

    Args:
        log_file: Log file path (default: Paths.log_file())
        debug: Also log DEBUG and above to stderr

    Returns:
        Configured "mounthelper" logger
    """
    logger = logging.getLogger(Branding.LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    log_file = Path(log_file) if log_file else Paths.log_file()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            str(log_file),
            maxBytes=Limits.LOG_MAX_BYTES,
            backupCount=Limits.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        # No log file is not a reason to refuse mounting
        print(f"Could not open log file {log_file}: {e}", file=sys.stderr)
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    if debug:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
        logger.addHandler(stderr_handler)

    return logger
