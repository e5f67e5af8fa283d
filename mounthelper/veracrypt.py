"""
VeraCrypt CLI Wrapper

Provides a thin wrapper around the VeraCrypt command-line interface:
- Executable discovery and auto-configuration
- Mount/unmount command construction for both CLI dialects
- Subprocess execution with captured output

Windows VeraCrypt has no stdin support, so the password goes on the command
line there (a known VeraCrypt limitation). On Linux/macOS it is fed on stdin
so it never shows up in the process list.
"""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from mounthelper.config import write_executable_path
from mounthelper.constants import FileNames, VeraCryptFlags
from mounthelper.drives import MountTarget
from mounthelper.limits import Limits
from mounthelper.paths import Paths, normalize_user_path
from mounthelper.platform import get_platform, is_admin, is_windows, subprocess_window_flags, veracrypt_cli_dialect

_vc_logger = logging.getLogger("mounthelper.veracrypt")

REDACTED = "********"


class VeraCryptError(Exception):
    """VeraCrypt operation failed."""

    pass


class ExecutableLaunchError(VeraCryptError):
    """The configured executable could not be started."""

    pass


@dataclass
class VeraCryptResult:
    """Outcome of one VeraCrypt invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def message(self) -> str:
        """Best available diagnostic text (stderr, else stdout)."""
        return (self.stderr or self.stdout or "").strip()


# ===========================================================================
# Executable discovery
# ===========================================================================


def is_valid_executable(path: Optional[str]) -> bool:
    """A configured path is usable if it is non-empty and names an existing file."""
    return bool(path) and os.path.isfile(path)


def find_veracrypt_exe() -> Optional[Path]:
    """
    Locate the VeraCrypt executable.

    Standard installation paths are checked first, then PATH.

    Returns:
        Path to VeraCrypt executable, or None if not found
    """
    for candidate in Paths.veracrypt_candidates():
        if candidate.is_file():
            _vc_logger.info(f"Found VeraCrypt at {candidate}")
            return candidate

    names = FileNames.VERACRYPT_WINDOWS_EXES if is_windows() else (FileNames.VERACRYPT_UNIX_EXE,)
    for name in names:
        vc_which = shutil.which(name)
        if vc_which:
            _vc_logger.info(f"Found VeraCrypt in PATH: {vc_which}")
            return Path(vc_which)

    _vc_logger.info("VeraCrypt not found in standard locations or PATH")
    return None


def auto_configure(config_path: Path) -> Optional[str]:
    """
    Find VeraCrypt and store its path in the config file.

    Returns:
        The stored path, or None if VeraCrypt could not be found.
    """
    exe = find_veracrypt_exe()
    if exe is None:
        return None

    path = normalize_user_path(str(exe))
    write_executable_path(config_path, path)
    return path


# ===========================================================================
# Command construction
# ===========================================================================


def elevation_prefix() -> List[str]:
    """
    Privilege elevation for Linux, where VeraCrypt needs root to mount.

    Uses pkexec (PolicyKit) to elevate just the VeraCrypt command.
    """
    if get_platform() != "linux" or is_admin():
        return []
    if shutil.which("pkexec"):
        return ["pkexec"]
    _vc_logger.warning("pkexec not found, VeraCrypt may fail without root privileges")
    return []


def build_mount_cmd(
    exe: str, volume_path: str, target: MountTarget, password: str, dialect: Optional[str] = None
) -> List[str]:
    """
    Build the VeraCrypt mount command.

    Windows: exe /v <volume> /l <letter> /p <password> /q /s /m rm
    Unix:    exe --text --non-interactive --stdin --mount <volume> <dir>
             (password goes to stdin, see mount_volume)
    """
    dialect = dialect or veracrypt_cli_dialect()

    if dialect == "windows":
        return [
            str(exe),
            VeraCryptFlags.WIN_VOLUME,
            volume_path,
            VeraCryptFlags.WIN_LETTER,
            target.cli_value,
            VeraCryptFlags.WIN_PASSWORD,
            password,
            VeraCryptFlags.WIN_QUIT,
            VeraCryptFlags.WIN_SILENT,
            VeraCryptFlags.WIN_MOUNT_OPTION,
            VeraCryptFlags.WIN_REMOVABLE,
        ]

    return [
        str(exe),
        VeraCryptFlags.UNIX_TEXT,
        VeraCryptFlags.UNIX_NON_INTERACTIVE,
        VeraCryptFlags.UNIX_STDIN,
        VeraCryptFlags.UNIX_MOUNT,
        volume_path,
        target.cli_value,
    ]


def build_unmount_cmd(exe: str, target: MountTarget, dialect: Optional[str] = None) -> List[str]:
    """
    Build the VeraCrypt unmount command.

    Windows: exe /d <letter> /q /s
    Unix:    exe --text --non-interactive --dismount <dir>
    """
    dialect = dialect or veracrypt_cli_dialect()

    if dialect == "windows":
        return [
            str(exe),
            VeraCryptFlags.WIN_DISMOUNT,
            target.cli_value,
            VeraCryptFlags.WIN_QUIT,
            VeraCryptFlags.WIN_SILENT,
        ]

    return [
        str(exe),
        VeraCryptFlags.UNIX_TEXT,
        VeraCryptFlags.UNIX_NON_INTERACTIVE,
        VeraCryptFlags.UNIX_DISMOUNT,
        target.cli_value,
    ]


def redact(cmd: List[str], secret: Optional[str]) -> List[str]:
    """Copy of cmd safe for logging."""
    if not secret:
        return list(cmd)
    return [REDACTED if arg == secret else arg for arg in cmd]


# ===========================================================================
# Execution
# ===========================================================================


def _run(cmd: List[str], *, timeout: int, stdin_text: Optional[str] = None, secret: Optional[str] = None):
    _vc_logger.info(f"Running: {redact(cmd, secret)}")

    io_kwargs = {"input": stdin_text} if stdin_text is not None else {"stdin": subprocess.DEVNULL}
    try:
        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            creationflags=subprocess_window_flags(),
            **io_kwargs,
        )
    except OSError as e:
        _vc_logger.error(f"Could not start {cmd[0]}: {e}")
        raise ExecutableLaunchError(str(e)) from e
    except subprocess.TimeoutExpired as e:
        _vc_logger.error(f"VeraCrypt timed out after {timeout}s")
        raise VeraCryptError(f"VeraCrypt did not finish within {timeout} seconds") from e

    result = VeraCryptResult(completed.returncode, completed.stdout or "", completed.stderr or "")
    _vc_logger.info(f"VeraCrypt exited with code {result.returncode}")
    if not result.ok and result.message:
        _vc_logger.warning(f"VeraCrypt output: {result.message}")
    return result


def mount_volume(
    exe: str, volume_path: str, target: MountTarget, password: str, dialect: Optional[str] = None
) -> VeraCryptResult:
    """
    Mount a VeraCrypt volume and wait for VeraCrypt to exit.

    Args:
        exe: VeraCrypt executable
        volume_path: Encrypted container file
        target: Drive letter or mount directory
        password: Volume password

    Returns:
        VeraCryptResult (check .ok and target.is_mounted())

    Raises:
        ExecutableLaunchError: exe could not be started
        VeraCryptError: VeraCrypt timed out
    """
    dialect = dialect or veracrypt_cli_dialect()
    cmd = build_mount_cmd(exe, volume_path, target, password, dialect)

    if dialect == "windows":
        return _run(cmd, timeout=Limits.VERACRYPT_MOUNT_TIMEOUT, secret=password)

    target.prepare()
    return _run(
        elevation_prefix() + cmd,
        timeout=Limits.VERACRYPT_MOUNT_TIMEOUT,
        stdin_text=password + "\n",
        secret=password,
    )


def unmount_volume(exe: str, target: MountTarget, dialect: Optional[str] = None) -> VeraCryptResult:
    """
    Unmount the volume mounted on target.

    Raises:
        ExecutableLaunchError: exe could not be started
        VeraCryptError: VeraCrypt timed out
    """
    dialect = dialect or veracrypt_cli_dialect()
    cmd = build_unmount_cmd(exe, target, dialect)

    if dialect == "windows":
        return _run(cmd, timeout=Limits.VERACRYPT_UNMOUNT_TIMEOUT)

    result = _run(elevation_prefix() + cmd, timeout=Limits.VERACRYPT_UNMOUNT_TIMEOUT)
    if result.ok:
        target.release()
    return result
