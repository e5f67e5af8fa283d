#!/usr/bin/env python3
"""
Unit tests for platform helpers: dialect selection, file manager launch and
console title.
"""

import subprocess
from unittest.mock import patch

import pytest

from mounthelper.platform import (
    file_manager_cmd,
    open_folder,
    subprocess_window_flags,
    veracrypt_cli_dialect,
)


class TestDialect:
    @pytest.mark.parametrize(
        "plat,expected",
        [("windows", "windows"), ("linux", "unix"), ("darwin", "unix")],
    )
    def test_dialect(self, plat, expected):
        with patch("mounthelper.platform.get_platform", return_value=plat):
            assert veracrypt_cli_dialect() == expected

    def test_no_window_flags_off_windows(self):
        with patch("mounthelper.platform.get_platform", return_value="linux"):
            assert subprocess_window_flags() == 0


class TestFileManager:
    @pytest.mark.parametrize(
        "plat,program",
        [("windows", "explorer"), ("darwin", "open"), ("linux", "xdg-open")],
    )
    def test_command_per_platform(self, tmp_path, plat, program):
        with patch("mounthelper.platform.get_platform", return_value=plat):
            assert file_manager_cmd(tmp_path) == [program, str(tmp_path)]

    def test_opens_existing_folder(self, tmp_path):
        with patch("mounthelper.platform.get_platform", return_value="linux"):
            with patch("mounthelper.platform.subprocess.Popen") as popen:
                assert open_folder(tmp_path) is True

        args, kwargs = popen.call_args
        assert args[0] == ["xdg-open", str(tmp_path)]
        assert kwargs["stdout"] is subprocess.DEVNULL
        assert kwargs["start_new_session"] is True

    def test_missing_folder(self, tmp_path):
        with patch("mounthelper.platform.subprocess.Popen") as popen:
            assert open_folder(tmp_path / "gone") is False

        popen.assert_not_called()

    def test_launch_error(self, tmp_path):
        with patch("mounthelper.platform.get_platform", return_value="linux"):
            with patch("mounthelper.platform.subprocess.Popen", side_effect=FileNotFoundError("xdg-open")):
                assert open_folder(tmp_path) is False
