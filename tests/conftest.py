from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Sample generated Go sources shared across unit and integration tests.
"""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

from go_samples import ENUM_GO, HELPER_GO, ITEM_GO, record_source

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
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes a Go file into the test directory."""

    def _write(file_name: str, content: str) -> Path:
        path = tmp_path / file_name
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def generated_dir(tmp_path: Path, write_go: Callable[[str, str], Path]) -> Path:
    """
    A directory resembling the schema compiler output.

    Structure:
    /tmp_path
      Item.go       (record)
      Weapon.go     (record)
      Rarity.go     (enum, no runtime import)
      Helper.go     (hand-written, no runtime import)
    """
    write_go("Item.go", ITEM_GO)
    write_go("Weapon.go", record_source("Weapon"))
    write_go("Rarity.go", ENUM_GO)
    write_go("Helper.go", HELPER_GO)
    return tmp_path
