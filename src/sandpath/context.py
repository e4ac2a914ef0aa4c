"""Redirection state and gateway construction.

This module separates gateway creation from gateway use. Every gateway owns
its own RedirectionState, so independent gateways never see each other's
sandbox. A lazily created process-wide gateway serves ergonomic call sites.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sandpath.gateway import FilesystemGateway
    from sandpath.protocols import Environment, Storage
    from sandpath.settings import SandpathSettings


@dataclass
class RedirectionState:
    """Where actual paths point.

    Attributes:
        sandbox_root: Canonical sandbox directory, or None when inactive.
            Every actual path is rebased under it while set.
        auto_expand_tilde: Expand a leading `~` before computing actual paths.
    """

    sandbox_root: str | None = None
    auto_expand_tilde: bool = False

    @property
    def sandboxed(self) -> bool:
        """True while a sandbox is active."""
        return self.sandbox_root is not None


_default_gateway: FilesystemGateway | None = None


def create_gateway(
    settings: SandpathSettings | None = None,
    storage: Storage | None = None,
    environment: Environment | None = None,
) -> FilesystemGateway:
    """Factory for gateways bound to their own redirection state.

    Use this in production code. For tests, pass doubles for storage or
    environment, or construct FilesystemGateway directly.

    Args:
        settings: Configuration. Defaults to SandpathSettings(), read from
            the SANDPATH_* environment variables.
        storage: Storage primitives. Defaults to the host filesystem.
        environment: Environment lookups. Defaults to the system environment,
            honouring settings.temp_root.

    Returns:
        Configured FilesystemGateway.
    """
    from sandpath.environment import SystemEnvironment
    from sandpath.filesystem import RealFileSystem
    from sandpath.gateway import FilesystemGateway
    from sandpath.settings import SandpathSettings

    settings = settings or SandpathSettings()
    return FilesystemGateway(
        storage=storage or RealFileSystem(),
        environment=environment or SystemEnvironment(temp_root=settings.temp_root),
        state=RedirectionState(auto_expand_tilde=settings.auto_expand_tilde),
        sandbox_prefix=settings.sandbox_prefix,
    )


def default_gateway() -> FilesystemGateway:
    """Get the process-wide gateway, creating it on first use."""
    global _default_gateway
    if _default_gateway is None:
        _default_gateway = create_gateway()
    return _default_gateway


def reset_default_gateway() -> None:
    """End the process-wide gateway's sandbox and drop the gateway."""
    global _default_gateway
    if _default_gateway is not None:
        _default_gateway.end_sandbox()
    _default_gateway = None
