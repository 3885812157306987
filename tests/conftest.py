"""Shared pytest fixtures."""

from __future__ import annotations

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo ``configure_logging`` so a CLI test's captured stderr stream does
    not leak into later tests."""
    yield
    structlog.reset_defaults()
