# mounthelper/drives.py - Mount target allocation
"""
Pick where the volume gets mounted.

Windows: the first free drive letter, never A: or B:.
Linux/macOS: the first free ~/veracryptN directory (N = 1..64).
"""

import logging
import os
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Set

from mounthelper.constants import Defaults
from mounthelper.limits import Limits
from mounthelper.paths import normalize_mount_letter
from mounthelper.platform import is_windows

_drives_logger = logging.getLogger("mounthelper.drives")


@dataclass(frozen=True)
class MountTarget:
    """A drive letter (Windows) or a mount directory (Unix)."""

    letter: Optional[str] = None
    mount_dir: Optional[Path] = None

    def __post_init__(self):
        if (self.letter is None) == (self.mount_dir is None):
            raise ValueError("MountTarget needs exactly one of letter or mount_dir")

    @property
    def is_drive_letter(self) -> bool:
        return self.letter is not None

    @property
    def cli_value(self) -> str:
        """Value passed to VeraCrypt: bare letter or directory path."""
        if self.is_drive_letter:
            return self.letter
        return str(self.mount_dir)

    @property
    def root(self) -> str:
        """Root of the mounted filesystem, as shown to the user."""
        if self.is_drive_letter:
            return f"{self.letter}:\\"
        return str(self.mount_dir)

    def __str__(self) -> str:
        return self.root

    def is_mounted(self) -> bool:
        if self.is_drive_letter:
            return os.path.isdir(self.root)
        return os.path.ismount(self.root)

    def prepare(self) -> None:
        """Create the mount directory (Unix). No-op for drive letters."""
        if self.mount_dir is not None:
            self.mount_dir.mkdir(parents=True, exist_ok=True)

    def release(self) -> None:
        """Remove the mount directory again if it is empty and unmounted."""
        if self.mount_dir is None or os.path.ismount(self.root):
            return
        try:
            self.mount_dir.rmdir()
        except OSError as e:
            _drives_logger.debug(f"Left mount directory {self.mount_dir} in place: {e}")


# =============================================================================
# Windows drive letters
# =============================================================================


def used_drive_letters() -> Set[str]:
    """
    Return the drive letters currently assigned on this machine.

    Uses GetLogicalDrives so letters of empty card readers and optical
    drives count as used too.
    """
    if is_windows():
        try:
            import ctypes

            bitmask = ctypes.windll.kernel32.GetLogicalDrives()
            if bitmask:
                return {letter for i, letter in enumerate(string.ascii_uppercase) if bitmask & (1 << i)}
        except (AttributeError, OSError) as e:
            _drives_logger.warning(f"GetLogicalDrives failed, probing drive roots instead: {e}")

    return {letter for letter in string.ascii_uppercase if os.path.exists(f"{letter}:\\")}


def pick_drive_letter(used: Iterable[str], reserved: Iterable[str] = Defaults.RESERVED_DRIVE_LETTERS) -> Optional[str]:
    """
    Return the first letter A-Z that is neither reserved nor in use.

    Args:
        used: Letters in use, any format normalize_mount_letter() accepts
        reserved: Letters never handed out

    Returns:
        Uppercase letter, or None if every letter is taken.
    """
    taken = {normalize_mount_letter(letter) for letter in used}
    taken.update(normalize_mount_letter(letter) for letter in reserved)

    for letter in string.ascii_uppercase:
        if letter not in taken:
            return letter
    return None


# =============================================================================
# Unix mount directories
# =============================================================================


def mount_dir_for_slot(slot: int, base: Optional[Path] = None) -> Path:
    return (base or Path.home()) / f"{Defaults.UNIX_MOUNT_PREFIX}{slot}"


def is_mount_dir_in_use(path: Path) -> bool:
    """A directory is in use if something is mounted on it or it holds files."""
    if os.path.ismount(str(path)):
        return True
    if path.is_dir():
        return any(path.iterdir())
    return path.exists()


def pick_mount_slot(
    is_used: Callable[[int], bool], max_slot: int = Limits.UNIX_MAX_MOUNT_SLOT
) -> Optional[int]:
    """Return the first slot 1..max_slot for which is_used() is False, or None."""
    for slot in range(1, max_slot + 1):
        if not is_used(slot):
            return slot
    return None


# =============================================================================
# Platform entry point
# =============================================================================


def allocate_mount_target(base: Optional[Path] = None) -> Optional[MountTarget]:
    """
    Pick a free mount target for the current platform.

    Args:
        base: Parent directory for Unix mount directories (default: home)

    Returns:
        MountTarget, or None if nothing is free.
    """
    if is_windows():
        used = used_drive_letters()
        letter = pick_drive_letter(used)
        _drives_logger.info(f"Drive letters in use: {''.join(sorted(used))}; picked {letter}")
        if letter is None:
            return None
        return MountTarget(letter=letter)

    slot = pick_mount_slot(lambda n: is_mount_dir_in_use(mount_dir_for_slot(n, base)))
    _drives_logger.info(f"Picked mount slot {slot}")
    if slot is None:
        return None
    return MountTarget(mount_dir=mount_dir_for_slot(slot, base))
