#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for the mount helper tests.

Sets up the import path so tests run from a plain checkout as well as from
an editable install, and provides a scripted terminal and a captured
rich output for exercising the interactive flow.
"""

import io
import sys
from pathlib import Path

# =============================================================================
# Path Setup - Execute BEFORE any test imports
# =============================================================================

_tests_dir = Path(__file__).resolve().parent
_repo_root = _tests_dir.parent

if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

REPO_ROOT = _repo_root
TESTS_DIR = _tests_dir

import pytest
from rich.console import Console

from mounthelper.cli_output import CLIOutput, set_output
from mounthelper.console import Terminal


# =============================================================================
# Test doubles
# =============================================================================


class ScriptedTerminal(Terminal):
    """
    Terminal fed from lists of lines and keys.

    Running out of scripted input raises EOFError, the same as a closed
    console, so a test that loops forever fails instead of hanging.
    """

    def __init__(self, lines=None, keys=None):
        self._keys = list(keys or [])
        stdin = io.StringIO("".join(f"{line}\n" for line in (lines or [])))
        super().__init__(stdin=stdin, stdout=io.StringIO(), key_reader=self._next_key)
        self.cleared = 0
        self.titles = []

    def _next_key(self) -> str:
        if not self._keys:
            raise EOFError
        return self._keys.pop(0)

    @property
    def written(self) -> str:
        return self.stdout.getvalue()

    def clear(self) -> None:
        self.cleared += 1

    def set_title(self, title: str) -> None:
        self.titles.append(title)


class CapturedOutput(CLIOutput):
    """CLIOutput writing stdout and stderr messages into one buffer."""

    def __init__(self, use_unicode: bool = True):
        self.buffer = io.StringIO()
        console = Console(file=self.buffer, width=200, color_system=None, highlight=False)
        super().__init__(use_unicode=use_unicode, width=60, console=console, err_console=console)

    @property
    def text(self) -> str:
        return self.buffer.getvalue()


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def make_terminal():
    """Factory: make_terminal(lines=[...], keys=[...])."""
    return ScriptedTerminal


@pytest.fixture
def output():
    """Captured CLIOutput, also installed as the module default."""
    captured = CapturedOutput()
    set_output(captured)
    yield captured
    set_output(None)


@pytest.fixture
def config_path(tmp_path):
    """Location for a config file that does not exist yet."""
    return tmp_path / "appdata" / "DocsEncryptorConfig.txt"


@pytest.fixture
def fake_exe(tmp_path):
    """An existing file standing in for the VeraCrypt executable."""
    exe = tmp_path / "VeraCrypt" / "VeraCrypt.exe"
    exe.parent.mkdir(parents=True)
    exe.write_bytes(b"MZ")
    return exe


@pytest.fixture
def volume_file(tmp_path):
    """An existing file standing in for an encrypted container."""
    volume = tmp_path / "vault.hc"
    volume.write_bytes(b"\x00" * 512)
    return volume
