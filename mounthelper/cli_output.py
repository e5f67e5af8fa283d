"""
CLI Output Formatting Module (SSOT)

Consistent terminal output for the mount helper, rendered through rich.
Elevated consoles on Windows can break UTF-8 encoding, so an ASCII symbol
set is used whenever the output encoding is not UTF-capable.

Usage:
    from mounthelper.cli_output import get_output

    out = get_output()
    out.info("Volume mounted")
    out.warn("Potential issue")
    out.error("Failed!")
    out.bullet("One of several reasons")
"""

import os
import sys
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class CLIOutput:
    """
    SSOT for consistent CLI output formatting.

    Plain messages are printed verbatim (no markup, no highlighting, no
    wrapping) so paths containing brackets or backslashes survive intact.
    """

    UNICODE_SYMBOLS = {
        "info": "✓",
        "warn": "⚠",
        "error": "✗",
        "bullet": "-",
        "section": "═",
    }

    ASCII_SYMBOLS = {
        "info": "[OK]",
        "warn": "[!!]",
        "error": "[ERROR]",
        "bullet": "-",
        "section": "=",
    }

    def __init__(
        self,
        use_unicode: bool = True,
        width: int = 70,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """
        Initialize CLI output formatter.

        Args:
            use_unicode: Use Unicode symbols (True) or ASCII fallback (False)
            width: Target width for section rules and boxes
            console: rich Console for regular output (default: stdout)
            err_console: rich Console for errors (default: stderr)
        """
        self.use_unicode = use_unicode
        self.width = width
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self._symbols = self.UNICODE_SYMBOLS if use_unicode else self.ASCII_SYMBOLS

    @classmethod
    def detect(cls, width: Optional[int] = None) -> "CLIOutput":
        """
        Auto-detect console capabilities and return appropriate formatter.

        Checks stdout encoding and PYTHONIOENCODING.
        """
        console = Console(highlight=False)
        if width is None:
            width = min(console.width, 80)

        use_unicode = True
        encoding = (getattr(sys.stdout, "encoding", None) or "").lower()
        if encoding and "utf" not in encoding:
            use_unicode = False

        io_encoding = os.environ.get("PYTHONIOENCODING", "")
        if io_encoding and "utf" not in io_encoding.lower():
            use_unicode = False

        return cls(use_unicode=use_unicode, width=width, console=console)

    @property
    def sym(self) -> dict:
        """Get current symbol set."""
        return self._symbols

    def _print(self, msg: str, console: Optional[Console] = None):
        (console or self.console).print(Text(msg), soft_wrap=True)

    def log(self, message: str):
        """Print a plain message."""
        self._print(message)

    def info(self, message: str):
        self._print(f"{self._symbols['info']} {message}")

    def warn(self, message: str):
        self._print(f"{self._symbols['warn']} {message}")

    def error(self, message: str):
        """Print error message to stderr."""
        self._print(f"{self._symbols['error']} {message}", console=self.err_console)

    def bullet(self, message: str):
        self._print(f"{self._symbols['bullet']} {message}")

    def blank(self):
        self._print("")

    def section(self, title: str, width: Optional[int] = None):
        """Print section header."""
        rule = self._symbols["section"] * (width or self.width)
        self._print(rule)
        self._print(f"  {title}")
        self._print(rule)

    def boxed(self, lines: list, title: Optional[str] = None, width: Optional[int] = None):
        """
        Print content in a box.

        Args:
            lines: List of strings to display
            title: Optional box title
            width: Box width (default: self.width)
        """
        body = Text("\n".join(lines))
        panel_box = box.ROUNDED if self.use_unicode else box.ASCII
        self.console.print(Panel(body, title=title, box=panel_box, width=width or self.width, expand=False))


# Module-level convenience functions
_default_output = None


def get_output() -> CLIOutput:
    """Get or create default CLIOutput instance."""
    global _default_output
    if _default_output is None:
        _default_output = CLIOutput.detect()
    return _default_output


def set_output(output: Optional[CLIOutput]) -> None:
    """Replace the default CLIOutput (None resets to auto-detection)."""
    global _default_output
    _default_output = output
