"""
Utility for safe UTF-8 encoding setup in Windows console.

Node labels and log lines may contain non-ASCII text, so the ingest CLI
switches the console to UTF-8 before printing anything.
"""

import os
import sys


def setup_console_encoding():
    """
    Sets up UTF-8 encoding for Windows console in a safe way.
    Doesn't break pytest and other tools that intercept stdout.
    """
    if sys.platform != "win32":
        return

    # Under pytest don't touch stdout/stderr
    if "pytest" in sys.modules:
        return

    # Not a terminal (possibly redirected to file) - don't touch
    if not sys.stdout.isatty() or not sys.stderr.isatty():
        return

    os.environ["PYTHONIOENCODING"] = "utf-8"

    if hasattr(sys.stdout, "reconfigure"):
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (OSError, ValueError):
            # Stream already detached or encoding locked; keep working as is
            return
