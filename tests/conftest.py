"""Shared pytest fixtures for Proact tests.

Fixtures are organized by category:
- Clock and identity fixtures: deterministic time and author lookups
- Project fixtures: temporary copies of the sample repositories
- Manifest fixtures: raw manifest text for extractor tests
- Logging fixtures: undo handler changes made by a test
"""

import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from proact.metadata.identity import StaticIdentityResolver
from tests.fixtures import get_sample_repo

FIXED_NOW = datetime(2025, 3, 14, 9, 30, 12)

# =============================================================================
# Clock and Identity Fixtures
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    """Return the moment every clock fixture reports."""
    return FIXED_NOW


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Return a clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def jane_identity() -> StaticIdentityResolver:
    """Identity with both name and email configured."""
    return StaticIdentityResolver(name="Jane Doe", email="jane@example.com")


@pytest.fixture
def no_identity() -> StaticIdentityResolver:
    """Identity lookup where git has nothing configured."""
    return StaticIdentityResolver()


# =============================================================================
# Project Fixtures
# =============================================================================


@pytest.fixture
def copy_sample_repo(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory copying a sample repository into tmp_path."""

    def _copy(name: str) -> Path:
        destination = tmp_path / name
        shutil.copytree(get_sample_repo(name), destination)
        return destination

    return _copy


@pytest.fixture
def empty_project(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    project = tmp_path / "empty_project"
    project.mkdir()
    return project


# =============================================================================
# Manifest Fixtures
# =============================================================================


@pytest.fixture
def cargo_toml() -> str:
    """Return sample Cargo.toml content."""
    return '''[package]
name = "test"
version = "0.1.0"
license = "MIT"
repository = "https://github.com/example/test"
'''


@pytest.fixture
def package_json() -> str:
    """Return sample package.json content."""
    return '''{
  "name": "test",
  "version": "1.0.0",
  "license": "ISC",
  "repository": "https://github.com/example/test-js",
  "dependencies": {
    "express": "^4.18.0"
  }
}'''


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def restore_logging():
    """Restore the proact logger's handlers and level after a test."""
    logger = logging.getLogger("proact")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
