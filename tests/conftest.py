"""Shared pytest fixtures for cgi_helper tests.

Fixtures are organized by category:
- Path fixtures: template files shipped with the tests
- Environment fixtures: isolated working directory, clean logging
- Context fixtures: sample template variables
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def templates_dir(fixtures_dir: Path) -> Path:
    """Return the path to template fixtures."""
    return fixtures_dir / "templates"


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so no config file is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def clean_logging() -> Iterator[logging.Logger]:
    """Restore the cgi_helper logger after a test reconfigures it."""
    logger = logging.getLogger("cgi_helper")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level

    yield logger

    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


# =============================================================================
# Context Fixtures
# =============================================================================


@pytest.fixture
def sample_context() -> dict[str, Any]:
    """Return variables for template rendering tests."""
    return {
        "name": "World",
        "title": "Tom & Jerry <3",
        "names": ["alpha", "beta", "gamma"],
        "count": 3,
    }
