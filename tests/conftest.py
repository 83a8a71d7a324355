from __future__ import annotations

import sys
from pathlib import Path

import pytest

_START = Path(__file__).resolve().parent
_repo_root = _START
while _repo_root != _repo_root.parent and not (_repo_root / "pyproject.toml").exists():
    _repo_root = _repo_root.parent

sys.path.insert(0, str(_repo_root))


@pytest.fixture
def default_window():
    from graphcalc import Viewport

    return Viewport.default()


@pytest.fixture
def canvas():
    from graphcalc import CanvasGeometry

    return CanvasGeometry(500, 300)
