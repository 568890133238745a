from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A factory fixture that lays out small source trees on disk.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """
    Return a helper that writes {relative_path: text} under tmp_path.

    Files are written in binary so line endings are kept exactly.

    Returns:
        Callable: Factory returning the tree root.
    """
    def _make(files: Dict[str, str]) -> Path:
        for rel, text in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(text.encode("utf-8"))
        return tmp_path

    return _make


@pytest.fixture
def main_util_tree(make_tree: Callable[[Dict[str, str]], Path]) -> Path:
    """The canonical two-file example: main.js requires util.js."""
    return make_tree({
        "main.js": "/*requires util.js */alert(1);",
        "util.js": "function f(){}",
    })
