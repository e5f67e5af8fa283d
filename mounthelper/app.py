#!/usr/bin/env python3
"""
VeraCrypt Mount Helper

Interactive front end that mounts one VeraCrypt container, waits for a
keypress and unmounts it again:

1. Confirm (or auto-detect, or edit) the VeraCrypt executable path
2. Ask for the encrypted volume path
3. Pick a free drive letter / mount directory
4. Read the password with masked entry
5. Mount, open the drive in the file manager
6. Wait for a key, unmount

Usage:
    vc-mount-helper
    vc-mount-helper --volume D:\\vault.hc
    python -m mounthelper --reconfigure

Dependencies (runtime):
- VeraCrypt:
    - Windows: VeraCrypt.exe (Program Files or configured path)
    - Linux/macOS: 'veracrypt' in PATH or standard install location
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Optional

from mounthelper.cli_output import CLIOutput, get_output
from mounthelper.config import read_executable_path, write_executable_path
from mounthelper.console import Terminal, read_password
from mounthelper.constants import Branding, ExitCodes, Keys, Prompts
from mounthelper.drives import allocate_mount_target
from mounthelper.logs import setup_logging
from mounthelper.paths import Paths, normalize_user_path
from mounthelper.platform import is_windows, open_folder
from mounthelper.veracrypt import (
    ExecutableLaunchError,
    VeraCryptError,
    auto_configure,
    is_valid_executable,
    mount_volume,
    unmount_volume,
)
from mounthelper.version import VERSION

_app_logger = logging.getLogger("mounthelper.app")


# =============================================================================
# Executable configuration
# =============================================================================


def prompt_executable_path(term: Terminal, config_path: Path) -> str:
    """Ask for the VeraCrypt executable path and persist whatever was entered."""
    path = normalize_user_path(term.read_line(Prompts.EXE_PATH_PROMPT))
    write_executable_path(config_path, path)
    return path


def confirm_executable(term: Terminal, out: CLIOutput, config_path: Path, exe: Optional[str]) -> str:
    """
    Loop until the user confirms a valid executable path.

    Enter confirms (rejected if the path is empty or not a file),
    "2" edits the path, any other key is an invalid selection.
    """
    while True:
        out.log(Prompts.EXE_IS_SET.format(path=exe or ""))
        term.write(Prompts.EXE_CONFIRM)
        key = term.read_key()
        term.writeln()

        if key == Keys.ENTER:
            if is_valid_executable(exe):
                _app_logger.info(f"Using VeraCrypt executable {exe}")
                return exe
            _app_logger.warning(f"Rejected executable path {exe!r}")
            out.log(Prompts.EXE_INVALID)
        elif key == Keys.EDIT_PATH:
            out.log(Prompts.EXE_EDIT_SELECTED)
            exe = prompt_executable_path(term, config_path)
        else:
            out.log(Prompts.EXE_INVALID_SELECTION)


def configure_executable(term: Terminal, out: CLIOutput, config_path: Path, reconfigure: bool = False) -> str:
    """
    Resolve the VeraCrypt executable to use.

    - Existing config: confirm the stored path (or edit it)
    - No config: auto-detect and store; if that fails, ask and then confirm
    - reconfigure: ask for a new path first, then confirm

    Returns:
        Path of an existing executable file.
    """
    config_path = Path(config_path)

    if reconfigure:
        exe = prompt_executable_path(term, config_path)
    elif config_path.is_file():
        exe = read_executable_path(config_path)
    else:
        exe = auto_configure(config_path)
        if exe:
            out.log(Prompts.EXE_AUTO_SET.format(path=exe))
            out.log(Prompts.EXE_AUTO_CONTINUE)
            term.read_line()
            return exe
        out.log(Prompts.EXE_NOT_FOUND)
        exe = prompt_executable_path(term, config_path)

    return confirm_executable(term, out, config_path, exe)


# =============================================================================
# Volume selection
# =============================================================================


def prompt_volume_path(term: Terminal, out: CLIOutput, initial: Optional[str] = None) -> str:
    """
    Ask for the encrypted volume until an existing file is given.

    Args:
        initial: Path from the command line, validated like typed input

    Returns:
        Normalized path of an existing file.
    """
    pending = initial
    while True:
        if pending is not None:
            path = normalize_user_path(pending)
            pending = None
        else:
            path = normalize_user_path(term.read_line(Prompts.VOLUME_PATH_PROMPT))

        if not path:
            out.log(Prompts.VOLUME_PATH_EMPTY)
        elif not os.path.isfile(path):
            _app_logger.info(f"Volume not found: {path}")
            out.log(Prompts.VOLUME_NOT_FOUND)
        else:
            _app_logger.info(f"Selected volume {path}")
            return path


# =============================================================================
# Mount / unmount
# =============================================================================


def report_mount_failure(out: CLIOutput, details: str = "") -> None:
    out.error(Prompts.MOUNT_FAILED)
    for reason in Prompts.MOUNT_FAILURE_REASONS:
        out.bullet(reason)
    if details:
        out.boxed(details.splitlines(), title="VeraCrypt output")


def wait_for_unmount_key(term: Terminal, out: CLIOutput) -> None:
    """Block until a key is pressed. Ctrl+C and closed stdin also unmount."""
    out.log(Prompts.PRESS_TO_UNMOUNT)
    try:
        term.read_key()
    except (KeyboardInterrupt, EOFError):
        _app_logger.info("Interrupted while mounted, unmounting")
        term.writeln()


def run(
    term: Terminal,
    out: CLIOutput,
    config_path: Path,
    volume: Optional[str] = None,
    reconfigure: bool = False,
    open_explorer: bool = True,
) -> int:
    """
    Run the interactive mount session.

    Returns:
        ExitCodes value
    """
    term.set_title(Branding.CONSOLE_TITLE)

    exe = configure_executable(term, out, config_path, reconfigure=reconfigure)
    term.clear()

    volume_path = prompt_volume_path(term, out, initial=volume)

    target = allocate_mount_target()
    if target is None:
        out.error(Prompts.NO_FREE_DRIVE)
        return ExitCodes.NO_MOUNT_TARGET

    out.log(Prompts.ADMIN_NOTICE)
    out.log(Prompts.UAC_NOTICE if is_windows() else Prompts.SUDO_NOTICE)
    out.blank()
    term.write(Prompts.PASSWORD_PROMPT)
    password = read_password(term)

    try:
        result = mount_volume(exe, volume_path, target, password)
    except ExecutableLaunchError as e:
        target.release()
        out.error(Prompts.LAUNCH_FAILED)
        out.log(str(e))
        return ExitCodes.MOUNT_FAILED
    except VeraCryptError as e:
        target.release()
        report_mount_failure(out, str(e))
        return ExitCodes.MOUNT_FAILED
    finally:
        del password

    if not (result.ok and target.is_mounted()):
        _app_logger.error(f"Mount failed: exit code {result.returncode}, mounted={target.is_mounted()}")
        target.release()
        report_mount_failure(out, result.message)
        return ExitCodes.MOUNT_FAILED

    out.info(Prompts.MOUNTED.format(target=target))
    if open_explorer:
        open_folder(Path(target.root))

    wait_for_unmount_key(term, out)

    try:
        result = unmount_volume(exe, target)
    except VeraCryptError as e:
        out.error(Prompts.UNMOUNT_FAILED)
        out.log(str(e))
        return ExitCodes.UNMOUNT_FAILED

    if result.ok:
        out.info(Prompts.UNMOUNTED.format(target=target))
        return ExitCodes.OK

    out.error(Prompts.UNMOUNT_FAILED)
    if result.stderr.strip():
        out.log(result.stderr.strip())
    return ExitCodes.UNMOUNT_FAILED


# =============================================================================
# Entry point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=Branding.CLI_NAME,
        description="Mount a VeraCrypt volume, wait for a keypress, then unmount it",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="PATH",
        help=f"File holding the VeraCrypt executable path (default: {Paths.config_file()})",
    )
    parser.add_argument("--volume", "-v", metavar="PATH", help="Encrypted volume to mount (skips the first prompt)")
    parser.add_argument("--reconfigure", action="store_true", help="Enter a new VeraCrypt executable path")
    parser.add_argument("--no-open", action="store_true", help="Do not open the mounted drive in the file manager")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(debug=args.debug)
    _app_logger.info(f"{Branding.PRODUCT_NAME} {VERSION} starting")

    out = get_output()
    term = Terminal()
    config_path = args.config.expanduser().resolve() if args.config else Paths.config_file()

    try:
        return run(
            term,
            out,
            config_path,
            volume=args.volume,
            reconfigure=args.reconfigure,
            open_explorer=not args.no_open,
        )
    except (KeyboardInterrupt, EOFError):
        term.writeln()
        out.error(Prompts.ABORTED)
        return ExitCodes.INTERRUPTED
    except Exception as e:
        _app_logger.exception("Unhandled error")
        out.error(str(e))
        return ExitCodes.MOUNT_FAILED
