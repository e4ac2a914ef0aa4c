"""Sandbox guard and best-effort tree removal."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sandpath.path import PathValue

if TYPE_CHECKING:
    from types import TracebackType

    from sandpath.gateway import FilesystemGateway
    from sandpath.protocols import Storage

logger = logging.getLogger(__name__)


class SandboxGuard:
    """Handle for an active sandbox.

    Releasing the guard ends its sandbox exactly once. Use it as a context
    manager so the sandbox is torn down on every exit path:

        with gateway.begin_sandbox() as sandbox:
            gateway.write_text(sandbox.of("/app/config.txt"), "data")

    Attributes:
        gateway: Gateway whose sandbox this guard controls.
        root: Actual directory backing the sandbox.
    """

    def __init__(self, gateway: FilesystemGateway, root: str) -> None:
        self.gateway = gateway
        self.root = root
        self._released = False

    @property
    def released(self) -> bool:
        """True once release() has run."""
        return self._released

    def of(self, raw: str) -> PathValue:
        """Create a logical path to use inside the sandbox."""
        return PathValue(raw)

    def release(self) -> None:
        """End the sandbox. Further calls do nothing."""
        if self._released:
            return
        self._released = True
        # The gateway may already have moved on to another sandbox.
        if self.gateway.state.sandbox_root == self.root:
            self.gateway.end_sandbox()

    def __enter__(self) -> SandboxGuard:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


def remove_tree(storage: Storage, root: str) -> list[str]:
    """Delete a directory tree entry by entry.

    Entries that cannot be removed get their permissions (and their
    parent's) forced open and are retried once. Symlinks are unlinked,
    never followed.

    Args:
        storage: Storage primitives.
        root: Actual path of the tree.

    Returns:
        Actual paths that could not be removed.
    """
    failed: list[str] = []
    if storage.exists(root) or storage.is_link(root):
        _remove_entry(storage, root, root, failed)
    return failed


def _remove_entry(storage: Storage, root: str, path: str, failed: list[str]) -> None:
    if storage.is_dir(path) and not storage.is_link(path):
        _, names = _attempt(storage, root, path, storage.list_entries)
        for name in names or []:
            _remove_entry(storage, root, os.path.join(path, name), failed)
        ok, _ = _attempt(storage, root, path, storage.remove_dir)
    else:
        ok, _ = _attempt(storage, root, path, storage.remove_file)
    if not ok:
        failed.append(path)


def _attempt(
    storage: Storage, root: str, path: str, action: Callable[[str], Any]
) -> tuple[bool, Any]:
    try:
        return True, action(path)
    except OSError as e:
        logger.debug("Retrying %s with open permissions: %s", path, e)

    try:
        # Never touch permissions outside the tree.
        if path != root:
            storage.set_permissive(os.path.dirname(path))
        storage.set_permissive(path)
        return True, action(path)
    except OSError as e:
        logger.warning("Could not clean up sandbox entry %s: %s", path, e)
        return False, None
