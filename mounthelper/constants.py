# mounthelper/constants.py - SINGLE SOURCE OF TRUTH for all shared string literals
"""
All shared string constants MUST be defined here.

Categories:
- Branding: Product name and console title
- FileNames: Configuration and log file names
- Defaults: Drive letters and mount slot naming
- VeraCryptFlags: Platform-specific command line flags
- Keys: Normalized key codes returned by the console reader
- Prompts: User-facing prompts and messages
"""


# =============================================================================
# Product Branding
# =============================================================================


class Branding:
    """Product branding constants."""

    PRODUCT_NAME = "VeraCrypt Mount Helper"
    CONSOLE_TITLE = f"{PRODUCT_NAME}. Powered by VeraCrypt."
    CLI_NAME = "vc-mount-helper"
    LOGGER_NAME = "mounthelper"


# =============================================================================
# File Names
# =============================================================================


class FileNames:
    """Configuration and log file names."""

    # Kept from earlier releases so existing installs keep their setting
    CONFIG_TXT = "DocsEncryptorConfig.txt"

    LOG_DIR = "VeraCryptMountHelper"
    LOG_FILE = "mounthelper.log"

    # Executable names, in search order
    VERACRYPT_WINDOWS_EXES = ("VeraCrypt-x64.exe", "VeraCrypt.exe")
    VERACRYPT_UNIX_EXE = "veracrypt"
    VERACRYPT_INSTALL_DIR = "VeraCrypt"


# =============================================================================
# Default Values
# =============================================================================


class Defaults:
    """Default mount target values."""

    # Floppy letters, never handed to VeraCrypt
    RESERVED_DRIVE_LETTERS = ("A", "B")

    # Unix mount directories are ~/veracrypt1, ~/veracrypt2, ...
    UNIX_MOUNT_PREFIX = "veracrypt"


# =============================================================================
# VeraCrypt CLI Flags - Platform-specific command options
# =============================================================================


class VeraCryptFlags:
    """VeraCrypt CLI flags for command construction."""

    # Windows flags (forward-slash style, short forms)
    WIN_VOLUME = "/v"
    WIN_LETTER = "/l"
    WIN_PASSWORD = "/p"
    WIN_QUIT = "/q"
    WIN_SILENT = "/s"
    WIN_MOUNT_OPTION = "/m"
    WIN_REMOVABLE = "rm"
    WIN_DISMOUNT = "/d"

    # Unix flags (double-dash style)
    UNIX_TEXT = "--text"
    UNIX_NON_INTERACTIVE = "--non-interactive"
    UNIX_STDIN = "--stdin"
    UNIX_MOUNT = "--mount"
    UNIX_DISMOUNT = "--dismount"


# =============================================================================
# Key codes
# =============================================================================


class Keys:
    """Normalized key codes produced by Terminal.read_key()."""

    ENTER = "\r"
    BACKSPACE = "\b"
    CTRL_C = "\x03"
    EDIT_PATH = "2"

    # Raw codes that map onto the normalized ones above
    RAW_ENTER = ("\r", "\n")
    RAW_BACKSPACE = ("\b", "\x7f")

    # msvcrt prefixes for arrow/function keys; the next char is a scan code
    WINDOWS_EXTENDED_PREFIXES = ("\x00", "\xe0")


# =============================================================================
# Prompts and Messages
# =============================================================================


class Prompts:
    """User-facing prompts and standardized messages."""

    EXE_IS_SET = 'VeraCrypt executable file is set to "{path}".'
    EXE_CONFIRM = "Press Enter to confirm or 2 to edit the path: "
    EXE_INVALID = "Invalid path. Please, try again."
    EXE_EDIT_SELECTED = "You selected edit file."
    EXE_INVALID_SELECTION = "Invalid selection."
    EXE_AUTO_SET = 'VeraCrypt executable file is automatically set to "{path}".'
    EXE_AUTO_CONTINUE = "Press ENTER to continue."
    EXE_NOT_FOUND = "Could not find VeraCrypt executable file automatically."
    EXE_PATH_PROMPT = (
        "Paste the path to the VeraCrypt executable or drag and drop the file "
        "onto the console window and press enter: "
    )

    VOLUME_PATH_PROMPT = (
        "Paste the path to your encrypted volume or drag and drop the file "
        "onto the console window and press enter: "
    )
    VOLUME_PATH_EMPTY = "The path cannot be empty."
    VOLUME_NOT_FOUND = "Volume file not found."

    NO_FREE_DRIVE = "Unable to find an available drive in the system to mount the file."

    ADMIN_NOTICE = "VeraCrypt requires administrative privileges."
    UAC_NOTICE = "You may see a User Account Control (UAC) prompt after you enter the password."
    SUDO_NOTICE = "You may be asked for your administrator password after you enter the volume password."
    PASSWORD_PROMPT = "Enter the password for the VeraCrypt volume: "

    LAUNCH_FAILED = (
        "The specified executable is not a valid. "
        "Please, restart the program and configure a VeraCrypt executable."
    )
    MOUNTED = "Volume mounted successfully on drive {target}"
    MOUNT_FAILED = "VeraCrypt encountered an error. Possible reasons include:"
    MOUNT_FAILURE_REASONS = (
        "VeraCrypt was not run with administrative privileges.",
        "Incorrect password for the file.",
        "Provided file is not a VeraCrypt volume.",
    )

    PRESS_TO_UNMOUNT = "Press any key to unmount the volume and exit..."
    UNMOUNTED = "Volume unmounted successfully from drive {target}"
    UNMOUNT_FAILED = "Failed to unmount the volume."

    CONFIG_READ_ERROR = "Error reading from configuration file: {error}"
    CONFIG_WRITE_ERROR = "Error updating configuration file: {error}"

    ABORTED = "Aborted by user."


# =============================================================================
# Exit codes
# =============================================================================


class ExitCodes:
    """Process exit codes returned by main()."""

    OK = 0
    MOUNT_FAILED = 1
    NO_MOUNT_TARGET = 2
    UNMOUNT_FAILED = 3
    INTERRUPTED = 130
