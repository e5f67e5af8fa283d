# mounthelper/config.py - Configuration file loading and saving
"""
SINGLE SOURCE OF TRUTH for configuration handling.

The configuration is a single plain-text file whose whole content is the
path to the VeraCrypt executable. There are no keys and no schema.

This module provides:
- Atomic file writes (temp file + rename)
- read_executable_path() / write_executable_path()

I/O errors are reported to the console and logged, never raised: the
caller simply asks the user again.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from mounthelper.cli_output import get_output
from mounthelper.constants import Prompts
from mounthelper.paths import normalize_user_path

_config_logger = logging.getLogger("mounthelper.config")


# =============================================================================
# Atomic Write
# =============================================================================


def write_file_atomic(file_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Replace file_path with content in one step.

    The text goes to a temp file in the same directory, is fsynced, and
    then renamed over the target. Readers see either the old or the new
    content.

    Raises:
        OSError: If the directory, temp file or rename fails
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(suffix=".tmp", prefix=f".{file_path.name}.", dir=str(file_path.parent))
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_name, file_path)
    except BaseException:
        try:
            os.unlink(temp_name)
        except OSError:
            pass
        raise

    _config_logger.debug(f"Wrote {file_path}")


# =============================================================================
# Executable path
# =============================================================================


def read_executable_path(config_path: Path) -> Optional[str]:
    """
    Read the VeraCrypt executable path from the config file.

    Args:
        config_path: Path to the plain-text config file

    Returns:
        The stored path with surrounding whitespace removed (may be empty),
        or None if the file does not exist or cannot be read.
    """
    config_path = Path(config_path)

    if not config_path.is_file():
        _config_logger.info(f"No config file at {config_path}")
        return None

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _config_logger.error(f"Could not read config {config_path}: {e}")
        get_output().error(Prompts.CONFIG_READ_ERROR.format(error=e))
        return None

    path = content.strip()
    _config_logger.info(f"Loaded executable path from {config_path}: {path!r}")
    return path


def write_executable_path(config_path: Path, executable_path: Optional[str]) -> bool:
    """
    Store the VeraCrypt executable path in the config file.

    The value is normalized (whitespace and surrounding quotes removed)
    before it is written. An empty value is stored as an empty file, which
    the confirmation prompt then rejects as an invalid path.

    Returns:
        True if the file was written, False on I/O error.
    """
    config_path = Path(config_path)
    value = normalize_user_path(executable_path)

    try:
        write_file_atomic(config_path, value)
    except OSError as e:
        _config_logger.error(f"Could not write config {config_path}: {e}")
        get_output().error(Prompts.CONFIG_WRITE_ERROR.format(error=e))
        return False

    _config_logger.info(f"Config written to {config_path}: {value!r}")
    return True
