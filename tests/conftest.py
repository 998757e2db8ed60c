"""
Pytest configuration and common fixtures for the command line tests.

All fixtures follow camelCase naming convention.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def tempDir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory, removed after the test.

    Yields:
        Path: Directory path
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def configFile(tempDir: Path) -> Path:
    """
    Provide a minimal valid config.toml with an API key and logging section.

    Returns:
        Path: Path of the written file
    """
    path = tempDir / "config.toml"
    path.write_text(
        '[google-maps]\napi-key = "cli_test_key_123"\ntimeout = 3\n\n[logging]\nlevel = "WARNING"\n',
        encoding="utf-8",
    )
    return path
