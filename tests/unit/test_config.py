#!/usr/bin/env python3
"""
Unit tests for the plain-text configuration file.

These tests verify:
1. The executable path survives a write/read cycle, normalized
2. A missing config file reads as None
3. Read and write errors are reported, not raised
4. write_file_atomic leaves no temp files behind
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from mounthelper.config import read_executable_path, write_executable_path, write_file_atomic


class TestAtomicWriteBehavior(unittest.TestCase):
    """Tests for write_file_atomic behavior."""

    def test_writes_text_content(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "config.txt"

            write_file_atomic(target, "C:\\Program Files\\VeraCrypt\\VeraCrypt.exe")

            self.assertEqual(target.read_text(encoding="utf-8"), "C:\\Program Files\\VeraCrypt\\VeraCrypt.exe")

    def test_creates_parent_directories(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "a" / "b" / "config.txt"

            write_file_atomic(target, "x")

            self.assertTrue(target.exists())

    def test_overwrites_existing_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "config.txt"
            target.write_text("old", encoding="utf-8")

            write_file_atomic(target, "new")

            self.assertEqual(target.read_text(encoding="utf-8"), "new")

    def test_no_temp_files_on_success(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "config.txt"

            write_file_atomic(target, "value")

            self.assertEqual(os.listdir(tmpdir), ["config.txt"])

    def test_cleanup_on_failure(self):
        """A failed rename must not leave the temp file behind."""
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "config.txt"

            with patch("mounthelper.config.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    write_file_atomic(target, "value")

            self.assertEqual(os.listdir(tmpdir), [])

    def test_cleanup_when_write_fails(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "config.txt"
            target.write_text("old", encoding="utf-8")

            with patch("mounthelper.config.os.fsync", side_effect=OSError("I/O error")):
                with self.assertRaises(OSError):
                    write_file_atomic(target, "new")

            self.assertEqual(os.listdir(tmpdir), ["config.txt"])
            self.assertEqual(target.read_text(encoding="utf-8"), "old")


class TestExecutablePath:
    """Tests for read_executable_path / write_executable_path."""

    def test_missing_file_reads_as_none(self, config_path, output):
        assert read_executable_path(config_path) is None
        assert output.text == ""

    def test_write_then_read(self, config_path, output):
        assert write_executable_path(config_path, "/usr/bin/veracrypt") is True
        assert read_executable_path(config_path) == "/usr/bin/veracrypt"

    def test_write_strips_quotes_and_whitespace(self, config_path, output):
        write_executable_path(config_path, '  "C:\\Program Files\\VeraCrypt\\VeraCrypt.exe"\n')
        assert config_path.read_text(encoding="utf-8") == "C:\\Program Files\\VeraCrypt\\VeraCrypt.exe"

    def test_read_strips_surrounding_whitespace(self, config_path, output):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("  /opt/veracrypt  \r\n", encoding="utf-8")
        assert read_executable_path(config_path) == "/opt/veracrypt"

    def test_empty_file_reads_as_empty_string(self, config_path, output):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("", encoding="utf-8")
        assert read_executable_path(config_path) == ""

    def test_write_none_stores_empty(self, config_path, output):
        write_executable_path(config_path, None)
        assert config_path.read_text(encoding="utf-8") == ""

    def test_read_error_is_reported(self, config_path, output):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("x", encoding="utf-8")

        with patch.object(Path, "read_text", side_effect=PermissionError("access denied")):
            assert read_executable_path(config_path) is None

        assert "Error reading from configuration file: access denied" in output.text

    def test_write_error_is_reported(self, config_path, output):
        with patch("mounthelper.config.write_file_atomic", side_effect=OSError("read-only filesystem")):
            assert write_executable_path(config_path, "/usr/bin/veracrypt") is False

        assert "Error updating configuration file: read-only filesystem" in output.text
        assert not config_path.exists()
