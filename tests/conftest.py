"""Shared test fixtures."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sandpath.context import RedirectionState, create_gateway, reset_default_gateway
from sandpath.gateway import FilesystemGateway
from sandpath.settings import SandpathSettings
from sandpath.testing import sandbox_gateway, sandbox_root  # noqa: F401


@pytest.fixture(autouse=True)
def _isolated_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SANDPATH_* variables from the outer environment out of tests."""
    for name in ("SANDPATH_AUTO_EXPAND_TILDE", "SANDPATH_SANDBOX_PREFIX", "SANDPATH_TEMP_ROOT"):
        monkeypatch.delenv(name, raising=False)


class FakeEnvironment:
    """Environment double with fixed answers."""

    def __init__(self, home: str | None = "/home/me", temp_root: str = "/tmp") -> None:
        self.home = home
        self.temp_root = temp_root
        self._tokens = itertools.count(1)

    def home_directory(self) -> str | None:
        return self.home

    def system_temp_directory(self) -> str:
        return self.temp_root

    def random_unique_token(self) -> str:
        return f"token{next(self._tokens)}"


@pytest.fixture
def fake_environment() -> FakeEnvironment:
    """Environment with home /home/me and temp root /tmp."""
    return FakeEnvironment()


# ============================================================================
# Mock Storage Fixture
# ============================================================================


@pytest.fixture
def mock_storage() -> MagicMock:
    """Create a mock Storage for testing.

    The mock records every primitive call without touching real files.
    """
    storage = MagicMock()
    storage.exists.return_value = False
    storage.is_file.return_value = False
    storage.is_dir.return_value = False
    storage.is_link.return_value = False
    storage.read_all.return_value = ""
    storage.list_entries.return_value = []
    storage.glob_match.return_value = []
    storage.canonicalize.return_value = None
    return storage


@pytest.fixture
def mock_gateway(mock_storage: MagicMock, fake_environment: FakeEnvironment) -> FilesystemGateway:
    """Gateway over mock storage with no sandbox."""
    return FilesystemGateway(storage=mock_storage, environment=fake_environment)


@pytest.fixture
def sandboxed_mock_gateway(
    mock_storage: MagicMock, fake_environment: FakeEnvironment
) -> FilesystemGateway:
    """Gateway over mock storage whose sandbox root is /sb."""
    return FilesystemGateway(
        storage=mock_storage,
        environment=fake_environment,
        state=RedirectionState(sandbox_root="/sb"),
    )


# ============================================================================
# Real Filesystem Fixtures
# ============================================================================


@pytest.fixture
def temp_settings(tmp_path: Path) -> SandpathSettings:
    """Settings that place sandboxes under tmp_path."""
    return SandpathSettings(temp_root=str(tmp_path))


@pytest.fixture
def gateway(temp_settings: SandpathSettings) -> Iterator[FilesystemGateway]:
    """Real gateway with sandboxes under tmp_path, cleaned up after the test."""
    gw = create_gateway(settings=temp_settings)
    yield gw
    gw.end_sandbox()


@pytest.fixture
def clean_default_gateway(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fresh process-wide gateway with sandboxes under tmp_path."""
    monkeypatch.setenv("SANDPATH_TEMP_ROOT", str(tmp_path))
    monkeypatch.delenv("SANDPATH_AUTO_EXPAND_TILDE", raising=False)
    reset_default_gateway()
    yield
    reset_default_gateway()
