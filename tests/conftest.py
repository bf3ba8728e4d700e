from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures building real directory trees under tmp_path.
"""

import os
import sys
from pathlib import Path

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
def flat_tree(tmp_path: Path) -> Path:
    """
    Small tree with known sizes.

    Structure:
    /root
      /sub          (empty)
      a.txt         (10 bytes)
      b.md          (2048 bytes)
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "sub").mkdir()
    (root / "a.txt").write_bytes(b"x" * 10)
    (root / "b.md").write_bytes(b"y" * 2048)
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """
    Three-level tree.

    Structure:
    /project
      /docs
        guide.md
      /src
        /pkg
          core.py
        main.py
      README.md
      setup.py
    """
    root = tmp_path / "project"
    (root / "docs").mkdir(parents=True)
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "docs" / "guide.md").write_text("# Guide", encoding="utf-8")
    (root / "src" / "pkg" / "core.py").write_text("x = 1\n", encoding="utf-8")
    (root / "src" / "main.py").write_text("print('hi')\n", encoding="utf-8")
    (root / "README.md").write_text("# Project", encoding="utf-8")
    (root / "setup.py").write_text("", encoding="utf-8")
    return root
