# mounthelper/paths.py - SINGLE SOURCE OF TRUTH for all filesystem paths
"""
All filesystem paths MUST be defined here as Path objects.

RULES:
- All paths are Path objects internally
- Convert to str() ONLY at I/O boundaries (subprocess, config file, print)
- Use Path arithmetic (/) for joins, never string concatenation
"""

import os
from pathlib import Path
from typing import List, Optional

from mounthelper.constants import FileNames
from mounthelper.platform import get_platform


class Paths:
    """
    Centralized path definitions. All paths are Path objects.

    Usage:
        from mounthelper.paths import Paths
        config_path = Paths.config_file()
    """

    # Linux install locations checked before falling back to PATH
    LINUX_VERACRYPT_PATHS = ("/usr/bin/veracrypt", "/usr/local/bin/veracrypt")
    MACOS_VERACRYPT_PATH = "/Applications/VeraCrypt.app/Contents/MacOS/VeraCrypt"

    # ==========================================================================
    # Per-user locations
    # ==========================================================================

    @classmethod
    def app_data_dir(cls) -> Path:
        """Return the per-user application data directory for the current platform."""
        plat = get_platform()

        if plat == "windows":
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata)
            return Path.home() / "AppData" / "Roaming"
        if plat == "darwin":
            return Path.home() / "Library" / "Application Support"

        xdg = os.environ.get("XDG_CONFIG_HOME")
        if xdg:
            return Path(xdg)
        return Path.home() / ".config"

    @classmethod
    def config_file(cls) -> Path:
        """Return the plain-text file holding the VeraCrypt executable path."""
        return cls.app_data_dir() / FileNames.CONFIG_TXT

    @classmethod
    def log_dir(cls) -> Path:
        return cls.app_data_dir() / FileNames.LOG_DIR

    @classmethod
    def log_file(cls) -> Path:
        return cls.log_dir() / FileNames.LOG_FILE

    # ==========================================================================
    # VeraCrypt installation paths (platform-specific)
    # ==========================================================================

    @classmethod
    def veracrypt_candidates(cls) -> List[Path]:
        """
        Return the standard VeraCrypt install locations, in search order.

        Windows checks both Program Files directories, preferring the
        64-bit executable name in each.
        """
        plat = get_platform()

        if plat == "windows":
            roots = [
                Path(os.environ.get("ProgramFiles", "C:\\Program Files")),
                Path(os.environ.get("ProgramFiles(x86)", "C:\\Program Files (x86)")),
            ]
            return [
                root / FileNames.VERACRYPT_INSTALL_DIR / exe_name
                for root in roots
                for exe_name in FileNames.VERACRYPT_WINDOWS_EXES
            ]
        if plat == "darwin":
            return [Path(cls.MACOS_VERACRYPT_PATH)]
        return [Path(p) for p in cls.LINUX_VERACRYPT_PATHS]


# =============================================================================
# Input normalization
# =============================================================================


def normalize_user_path(text: Optional[str]) -> str:
    """
    Clean a path typed, pasted or dropped onto the console.

    Dragging a file onto a Windows console wraps it in double quotes, and
    pasted text often carries stray whitespace.

    Examples:
        '  "C:\\vault.hc" ' -> 'C:\\vault.hc'
        None -> ''
    """
    if text is None:
        return ""
    return text.strip().strip('"').strip()


def normalize_mount_letter(letter: str) -> str:
    """
    Normalize Windows drive letter to canonical format for VeraCrypt CLI.

    Args:
        letter: Drive letter in various formats ("Z", "z:", " /Z: ", "Z:\\")

    Returns:
        Canonical uppercase single letter (e.g., "Z")

    Raises:
        ValueError: If input is empty, multi-char (after cleanup), or non-alpha
    """
    if letter is None:
        raise ValueError("Drive letter is empty")

    cleaned = letter.strip().lstrip("/-").rstrip("\\/").rstrip(":").strip()
    if not cleaned:
        raise ValueError(f"Drive letter is empty: {letter!r}")
    if len(cleaned) != 1 or not ("A" <= cleaned.upper() <= "Z"):
        raise ValueError(f"Invalid drive letter: {letter!r}")
    return cleaned.upper()
