#!/usr/bin/env python3
"""
Unit tests for CLIOutput formatting.

Verifies:
1. Unicode and ASCII symbol sets
2. Messages are printed verbatim (brackets are not rich markup)
3. Errors go to the error console
4. detect() falls back to ASCII on non-UTF consoles
"""

import io
import unittest
from unittest.mock import patch

from rich.console import Console

from mounthelper.cli_output import CLIOutput, get_output, set_output


def _captured(use_unicode=True):
    out_buf, err_buf = io.StringIO(), io.StringIO()
    out = CLIOutput(
        use_unicode=use_unicode,
        width=40,
        console=Console(file=out_buf, width=120, color_system=None),
        err_console=Console(file=err_buf, width=120, color_system=None),
    )
    return out, out_buf, err_buf


class TestCLIOutputSymbols(unittest.TestCase):
    """Symbol sets."""

    def test_unicode_symbols(self):
        out, out_buf, err_buf = _captured(use_unicode=True)

        out.info("Mounted")
        out.warn("Careful")
        out.error("Failed")

        self.assertIn("✓ Mounted", out_buf.getvalue())
        self.assertIn("⚠ Careful", out_buf.getvalue())
        self.assertIn("✗ Failed", err_buf.getvalue())

    def test_ascii_symbols(self):
        out, out_buf, err_buf = _captured(use_unicode=False)

        out.info("Mounted")
        out.warn("Careful")
        out.error("Failed")

        self.assertIn("[OK] Mounted", out_buf.getvalue())
        self.assertIn("[!!] Careful", out_buf.getvalue())
        self.assertIn("[ERROR] Failed", err_buf.getvalue())
        self.assertNotIn("✓", out_buf.getvalue())

    def test_error_not_on_stdout(self):
        out, out_buf, _ = _captured()
        out.error("Failed")
        self.assertEqual(out_buf.getvalue(), "")

    def test_bullet(self):
        out, out_buf, _ = _captured()
        out.bullet("Incorrect password for the file.")
        self.assertEqual(out_buf.getvalue(), "- Incorrect password for the file.\n")


class TestCLIOutputVerbatim(unittest.TestCase):
    """Paths and VeraCrypt output must survive untouched."""

    def test_brackets_are_not_markup(self):
        out, out_buf, _ = _captured()
        out.log("[bold]C:\\Users\\me\\[vault].hc")
        self.assertEqual(out_buf.getvalue(), "[bold]C:\\Users\\me\\[vault].hc\n")

    def test_long_line_not_wrapped(self):
        out, out_buf, _ = _captured()
        line = "x" * 300
        out.log(line)
        self.assertEqual(out_buf.getvalue(), line + "\n")


class TestCLIOutputLayout(unittest.TestCase):
    def test_section(self):
        out, out_buf, _ = _captured(use_unicode=False)
        out.section("VeraCrypt", width=10)
        self.assertEqual(out_buf.getvalue(), "==========\n  VeraCrypt\n==========\n")

    def test_boxed_contains_title_and_lines(self):
        out, out_buf, _ = _captured(use_unicode=False)
        out.boxed(["Incorrect password", "or not a VeraCrypt volume"], title="VeraCrypt output")

        text = out_buf.getvalue()
        self.assertIn("VeraCrypt output", text)
        self.assertIn("Incorrect password", text)
        self.assertIn("or not a VeraCrypt volume", text)
        self.assertIn("+", text)


class TestDetect(unittest.TestCase):
    def test_non_utf_stdout_uses_ascii(self):
        fake_stdout = io.TextIOWrapper(io.BytesIO(), encoding="cp1252")
        with patch("mounthelper.cli_output.sys.stdout", fake_stdout):
            with patch.dict("os.environ", {"PYTHONIOENCODING": ""}):
                self.assertFalse(CLIOutput.detect(width=60).use_unicode)

    def test_pythonioencoding_overrides(self):
        fake_stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        with patch("mounthelper.cli_output.sys.stdout", fake_stdout):
            with patch.dict("os.environ", {"PYTHONIOENCODING": "ascii"}):
                self.assertFalse(CLIOutput.detect(width=60).use_unicode)

    def test_utf8_uses_unicode(self):
        fake_stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        with patch("mounthelper.cli_output.sys.stdout", fake_stdout):
            with patch.dict("os.environ", {"PYTHONIOENCODING": ""}):
                self.assertTrue(CLIOutput.detect(width=60).use_unicode)


class TestDefaultOutput(unittest.TestCase):
    def tearDown(self):
        set_output(None)

    def test_set_and_get(self):
        out, _, _ = _captured()
        set_output(out)
        self.assertIs(get_output(), out)

    def test_get_is_cached(self):
        set_output(None)
        self.assertIs(get_output(), get_output())
