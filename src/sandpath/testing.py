"""pytest fixtures for running tests inside a sandbox.

Load with `pytest_plugins = ["sandpath.testing"]` in a conftest.py. pytest is
not a runtime dependency; install the `test` extra (`sandpath[test]`) to use
these fixtures.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from sandpath.context import create_gateway
from sandpath.gateway import FilesystemGateway
from sandpath.settings import SandpathSettings


@pytest.fixture
def sandbox_gateway() -> Iterator[FilesystemGateway]:
    """Gateway with an active sandbox, torn down after the test."""
    gateway = create_gateway(settings=SandpathSettings())
    with gateway.begin_sandbox():
        yield gateway


@pytest.fixture
def sandbox_root(sandbox_gateway: FilesystemGateway) -> str:
    """Actual directory backing the sandbox of sandbox_gateway."""
    root = sandbox_gateway.state.sandbox_root
    assert root is not None
    return root
