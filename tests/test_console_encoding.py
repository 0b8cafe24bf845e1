"""
Tests for console_encoding module.
"""

import os
import sys
from unittest.mock import Mock, patch

from socialgraph.utils.console_encoding import setup_console_encoding


def tty_stream():
    stream = Mock()
    stream.isatty.return_value = True
    return stream


class TestConsoleEncoding:
    def test_non_windows_platform(self):
        with patch("sys.platform", "linux"):
            stdout = tty_stream()
            with patch.object(sys, "stdout", stdout):
                setup_console_encoding()

            stdout.reconfigure.assert_not_called()

    def test_pytest_environment(self):
        with patch("sys.platform", "win32"):
            stdout = tty_stream()
            with patch.object(sys, "stdout", stdout):
                setup_console_encoding()

            stdout.reconfigure.assert_not_called()

    def test_non_tty_streams(self, monkeypatch):
        monkeypatch.delitem(sys.modules, "pytest")
        stdout = Mock()
        stdout.isatty.return_value = False

        with patch("sys.platform", "win32"):
            with patch.object(sys, "stdout", stdout), patch.object(sys, "stderr", tty_stream()):
                setup_console_encoding()

        stdout.reconfigure.assert_not_called()

    def test_reconfigure_on_windows_tty(self, monkeypatch):
        monkeypatch.delitem(sys.modules, "pytest")
        monkeypatch.setenv("PYTHONIOENCODING", "ascii")
        stdout, stderr = tty_stream(), tty_stream()

        with patch("sys.platform", "win32"):
            with patch.object(sys, "stdout", stdout), patch.object(sys, "stderr", stderr):
                setup_console_encoding()

        stdout.reconfigure.assert_called_once_with(encoding="utf-8")
        assert os.environ["PYTHONIOENCODING"] == "utf-8"
        stderr.reconfigure.assert_called_once_with(encoding="utf-8")

    def test_reconfigure_failure_tolerated(self, monkeypatch):
        monkeypatch.delitem(sys.modules, "pytest")
        monkeypatch.setenv("PYTHONIOENCODING", "ascii")
        stdout, stderr = tty_stream(), tty_stream()
        stdout.reconfigure.side_effect = ValueError("detached")

        with patch("sys.platform", "win32"):
            with patch.object(sys, "stdout", stdout), patch.object(sys, "stderr", stderr):
                setup_console_encoding()

        stderr.reconfigure.assert_not_called()
