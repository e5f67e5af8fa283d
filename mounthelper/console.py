# mounthelper/console.py - Keyboard and screen access for the interactive flow
"""
Interactive console input.

Terminal wraps the three things the mount helper needs from the console:
line input (paths), single unechoed keys (menu choices, "press any key"),
and masked password entry built on top of single keys.

Key reading:
- Windows: msvcrt.getwch(), extended keys yield ''
- Unix: termios raw mode, escape sequences (arrow keys etc.) yield ''
- Non-tty stdin: plain character reads, so piped input still works

Every key is normalized: Enter -> Keys.ENTER, Backspace/Delete ->
Keys.BACKSPACE, Ctrl+C raises KeyboardInterrupt.
"""

import codecs
import logging
import os
import sys
from collections import deque
from typing import Callable, Optional, TextIO

from mounthelper.constants import Keys
from mounthelper.platform import clear_terminal, is_windows, set_console_title

_console_logger = logging.getLogger("mounthelper.console")

MASK_CHAR = "*"
ERASE_SEQUENCE = "\b \b"


def normalize_key(raw: str) -> str:
    """
    Map a raw key code onto the normalized codes in Keys.

    Raises:
        KeyboardInterrupt: For Ctrl+C (raw mode suppresses SIGINT)
    """
    if raw == Keys.CTRL_C:
        raise KeyboardInterrupt
    if raw in Keys.RAW_ENTER:
        return Keys.ENTER
    if raw in Keys.RAW_BACKSPACE:
        return Keys.BACKSPACE
    return raw


def read_key_windows() -> str:
    """Read one key with msvcrt. Arrow and function keys yield ''."""
    import msvcrt

    ch = msvcrt.getwch()
    if ch in Keys.WINDOWS_EXTENDED_PREFIXES:
        msvcrt.getwch()  # scan code
        return ""
    return ch


class UnixKeyReader:
    """
    Read single keys from a Unix terminal in raw mode.

    One keypress can arrive as several bytes (UTF-8 characters, escape
    sequences, pasted text), so each read takes whatever is available and
    queues the decoded characters.
    """

    CHUNK_SIZE = 64

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self._pending = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __call__(self) -> str:
        while not self._pending:
            self._fill()
        return self._pending.popleft()

    def _fill(self) -> None:
        try:
            fd = self.stream.fileno()
            interactive = os.isatty(fd)
        except (AttributeError, ValueError, OSError):
            interactive = False

        if not interactive:
            ch = self.stream.read(1)
            if ch == "":
                raise EOFError
            self._pending.append(ch)
            return

        import termios
        import tty

        old_attrs = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            data = os.read(fd, self.CHUNK_SIZE)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_attrs)

        if not data:
            raise EOFError
        text = self._decoder.decode(data)
        if text.startswith("\x1b"):
            # Cursor/function key: one empty key, like read_key_windows()
            self._pending.append("")
            return
        self._pending.extend(text)


def default_key_reader(stream: Optional[TextIO] = None) -> Callable[[], str]:
    if is_windows():
        return read_key_windows
    return UnixKeyReader(stream)


class Terminal:
    """
    Console front end used by the interactive flow.

    Tests pass StringIO streams and a scripted key_reader.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        key_reader: Optional[Callable[[], str]] = None,
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._key_reader = key_reader or default_key_reader(self.stdin)

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    def read_line(self, prompt: str = "") -> str:
        """
        Print prompt and read one line (without the line terminator).

        Raises:
            EOFError: If stdin is closed
        """
        if prompt:
            self.write(prompt)
        line = self.stdin.readline()
        if line == "":
            raise EOFError
        return line.rstrip("\r\n")

    def read_key(self) -> str:
        """Read one normalized key without echo."""
        return normalize_key(self._key_reader())

    def clear(self) -> None:
        clear_terminal()

    def set_title(self, title: str) -> None:
        set_console_title(title)


def read_password(term: Terminal) -> str:
    """
    Read a password with masked echo.

    Each typed character echoes MASK_CHAR. Backspace removes the last
    character and erases one mask character; on an empty buffer it does
    nothing. Enter finishes input and moves to the next line.

    The password is never logged.
    """
    chars = []
    while True:
        key = term.read_key()
        if key == Keys.ENTER:
            break
        if key == Keys.BACKSPACE:
            if chars:
                chars.pop()
                term.write(ERASE_SEQUENCE)
            continue
        if not key:
            continue
        chars.append(key)
        term.write(MASK_CHAR)

    term.writeln()
    _console_logger.debug("Password entry finished")
    return "".join(chars)
