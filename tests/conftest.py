"""Pytest configuration and fixtures."""


import pytest

from core.spawn import SpawnError


@pytest.fixture
def sample_ls_output():
    """Sample `pnpm ls -json` output for testing."""
    return """
[
  {
    "name": "test-project",
    "version": "1.0.0",
    "dependencies": {
      "lodash": {"from": "lodash", "version": "4.17.21"}
    }
  }
]
"""


@pytest.fixture
def sample_lockfile():
    """Sample lockfile content with local file references."""
    return """lockfileVersion: '6.0'
version: file:../app
dependencies:
  local-lib:
    version: file:../libs/local-lib
    resolved: true
  lodash:
    version: 4.17.21
    dependencies:
      nested:
        version: file:../nested
"""


@pytest.fixture
def make_spawn_error():
    """Factory for SpawnError instances carrying captured output."""

    def _make(stderr: str = "", stdout: str = "", returncode: int = 1) -> SpawnError:
        return SpawnError("pnpm failed", stdout=stdout, stderr=stderr, returncode=returncode)

    return _make
