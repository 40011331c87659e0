"""
Pytest Configuration

Shared fixtures for the ManifestTools suite: per-test mocked HTTP sites, the
static manifest assets under ``tests/assets``, and logger isolation.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Generator

import pytest

# --- Globals ---

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for _path in (SRC, ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from tests.fixtures.http_mocking import mock_site  # noqa: E402,F401

ASSETS_DIR = Path(__file__).resolve().parent / "assets"


@pytest.fixture
def assets_dir() -> Path:
    """Directory holding the manifest fixtures."""
    return ASSETS_DIR


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Generator[None, None, None]:
    """Undo logger changes made by ``setup_logging`` (e.g. from CLI tests)."""
    logger = logging.getLogger("ManifestTools")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
