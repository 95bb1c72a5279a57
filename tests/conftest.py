"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _bind_logging_to_current_stderr() -> None:
    """Rebind structlog output to the stderr stream of the running test."""
    from core.logging_config import configure_logging

    # Only rebinds the output stream; TREEFS_LOG_LEVEL is not honored in tests.
    configure_logging("info")
