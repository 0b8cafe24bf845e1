"""
Global pytest configuration.
Loads environment variables from .env and provides sample graphs.
"""

import pytest
from dotenv import load_dotenv

from socialgraph.parser import parse

load_dotenv()

# Triangle 0-1-2 plus a separate 3-4 pair, with a comment and a blank line
EXAMPLE_EDGE_LIST = "0 1\n0 2\n1 2\n# comment\n\n3 4"

EXAMPLE_CSV = "source,target\n10,20\n10,30"


@pytest.fixture
def example_snapshot():
    """Snapshot of EXAMPLE_EDGE_LIST."""
    return parse(EXAMPLE_EDGE_LIST, "edge-list")


@pytest.fixture
def star_snapshot():
    """Hub 0 connected to 1..20, plus a 21-22-23 chain."""
    lines = [f"0 {i}" for i in range(1, 21)] + ["21 22", "22 23"]
    return parse("\n".join(lines), "edge-list")


@pytest.fixture
def temp_project_dir(tmp_path):
    """
    Creates a temporary project layout for CLI tests.
    Returns tuple (temp_path, raw_dir, out_dir, logs_dir).
    """
    raw_dir = tmp_path / "data" / "raw"
    out_dir = tmp_path / "data" / "out"
    logs_dir = tmp_path / "logs"

    raw_dir.mkdir(parents=True)
    out_dir.mkdir(parents=True)
    logs_dir.mkdir()

    return tmp_path, raw_dir, out_dir, logs_dir
