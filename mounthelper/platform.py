# mounthelper/platform.py - SINGLE SOURCE OF TRUTH for platform detection
"""
Platform-specific detection and console/shell helpers.

This module provides:
- get_platform(): Get normalized platform name
- is_admin(): Check if current process has admin/root privileges
- veracrypt_cli_dialect(): "windows" (/flag) or "unix" (--flag)
- set_console_title(): Window title for the console
- clear_terminal(): Clear screen without dropping scrollback
- open_folder(): Show a directory in the system file manager

Tests patch get_platform() to exercise the other branches.
"""

import logging
import os
import platform as _platform
import subprocess
import sys
from pathlib import Path

_platform_logger = logging.getLogger("mounthelper.platform")

# Only defined on Windows builds of Python
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)

# ANSI: clear screen + cursor home. \033[3J would also wipe scrollback.
ANSI_CLEAR = "\033[2J\033[H"


def get_platform() -> str:
    """
    Get normalized platform name.

    Returns:
        One of: "windows", "darwin", "linux", or the raw system name lowercase.
    """
    return _platform.system().lower()


def is_windows() -> bool:
    """Check if running on Windows."""
    return get_platform() == "windows"


def is_admin() -> bool:
    """
    Check if the current process has administrator/root privileges.

    Windows: Uses ctypes to check for admin token
    Unix: Checks effective user ID (euid == 0)
    """
    if is_windows():
        try:
            import ctypes

            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        except (AttributeError, OSError):
            return False
    try:
        return os.geteuid() == 0
    except AttributeError:
        return False


def veracrypt_cli_dialect() -> str:
    """
    Get the VeraCrypt CLI dialect identifier.

    Returns:
        "windows" or "unix"
    """
    return "windows" if is_windows() else "unix"


def subprocess_window_flags() -> int:
    """creationflags that keep child processes from opening a console window."""
    return CREATE_NO_WINDOW if is_windows() else 0


def set_console_title(title: str) -> None:
    """Set the console window title (SetConsoleTitleW on Windows, OSC 0 elsewhere)."""
    if is_windows():
        try:
            import ctypes

            ctypes.windll.kernel32.SetConsoleTitleW(title)
            return
        except (AttributeError, OSError) as e:
            _platform_logger.debug(f"SetConsoleTitleW unavailable: {e}")
    if sys.stdout.isatty():
        sys.stdout.write(f"\033]0;{title}\007")
        sys.stdout.flush()


def clear_terminal() -> None:
    """
    Clear the terminal screen.

    Windows: ANSI escape codes when virtual terminal processing is enabled,
    otherwise `cls`. Unix: `clear`, falling back to ANSI escape codes.
    """
    if is_windows():
        try:
            import ctypes

            kernel32 = ctypes.windll.kernel32
            handle = kernel32.GetStdHandle(-11)  # STD_OUTPUT_HANDLE
            mode = ctypes.c_ulong()
            kernel32.GetConsoleMode(handle, ctypes.byref(mode))
            # ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
            if mode.value & 0x0004:
                print(ANSI_CLEAR, end="", flush=True)
                return
        except (AttributeError, OSError):
            pass
        subprocess.run(["cmd", "/c", "cls"], shell=False, check=False, creationflags=CREATE_NO_WINDOW)
        return

    try:
        result = subprocess.run(["clear"], shell=False, check=False)
        if result.returncode == 0:
            return
    except OSError:
        pass
    print(ANSI_CLEAR, end="", flush=True)


def file_manager_cmd(path: Path) -> list[str]:
    """Command that shows `path` in the platform file manager."""
    plat = get_platform()
    if plat == "windows":
        return ["explorer", str(path)]
    if plat == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]


def open_folder(path: Path) -> bool:
    """Open a directory in the system file manager.

    Uses subprocess with CREATE_NO_WINDOW on Windows instead of os.startfile().
    explorer.exe returns 1 even on success, so the exit code is not checked.

    Returns True if the file manager was launched, False otherwise.
    """
    path = Path(path)
    if not path.exists():
        _platform_logger.warning(f"Cannot open missing folder: {path}")
        return False

    cmd = file_manager_cmd(path)
    try:
        if is_windows():
            subprocess.Popen(cmd, creationflags=CREATE_NO_WINDOW)
        else:
            subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
    except OSError as e:
        _platform_logger.warning(f"Could not open {path} with {cmd[0]}: {e}")
        return False

    _platform_logger.info(f"Opened {path} with {cmd[0]}")
    return True
