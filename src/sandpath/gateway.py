"""Filesystem operations on logical paths.

The gateway is the only place where a logical PathValue becomes an actual
path string. actual_path() expands `~` when configured, converts separators
to the host convention and, while a sandbox is active, rebases every path
(absolute or relative) under the sandbox root. Sandboxed paths have `.` and
`..` resolved lexically first, so no logical path reaches above the root.
Operations that return paths map results back to logical form, so callers
never see the sandbox prefix.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator

from sandpath.context import RedirectionState
from sandpath.errors import (
    InvalidPathArgument,
    MissingParentError,
    PathNotADirectoryError,
    PathNotAFileError,
    SandboxActiveError,
    SandboxSetupError,
    StorageError,
)
from sandpath.path import PathValue
from sandpath.protocols import Environment, Storage
from sandpath.sandbox import SandboxGuard, remove_tree
from sandpath.settings import DEFAULT_SANDBOX_PREFIX

logger = logging.getLogger(__name__)

_DRIVE_COLON_RE = re.compile(r"[A-Za-z]:")


def _as_path(value: str | PathValue) -> PathValue:
    if isinstance(value, PathValue):
        return value
    if isinstance(value, str):
        return PathValue(value)
    raise TypeError(f"Expected str or PathValue, got {type(value).__name__}")


def _reason(error: OSError) -> str:
    """Describe an OSError without echoing the actual path it names."""
    return error.strerror or type(error).__name__


class FilesystemGateway:
    """Runs file operations for logical paths against storage primitives."""

    def __init__(
        self,
        storage: Storage,
        environment: Environment,
        state: RedirectionState | None = None,
        sandbox_prefix: str = DEFAULT_SANDBOX_PREFIX,
    ) -> None:
        """Initialize the gateway.

        Args:
            storage: Storage primitives that receive actual paths.
            environment: Home directory, temp root and token lookups.
            state: Redirection state. Defaults to a fresh, unsandboxed state.
            sandbox_prefix: Default name prefix for sandbox directories.

        Note:
            Prefer `sandpath.context.create_gateway()` for construction.
        """
        self.storage = storage
        self.environment = environment
        self.state = state or RedirectionState()
        self.sandbox_prefix = sandbox_prefix

    # ========================================================================
    # Path mapping
    # ========================================================================

    def actual_path(self, path: str | PathValue) -> str:
        """Compute the string handed to storage for a logical path.

        Args:
            path: Logical path.

        Returns:
            Actual path in host separator convention, rebased under the
            sandbox root while one is active.
        """
        path = _as_path(path)
        if self.state.auto_expand_tilde:
            path = path.expand_user(self.environment)
        host = path.raw.replace("/", os.sep).replace("\\", os.sep)

        root = self.state.sandbox_root
        if root is None:
            return host.rstrip(os.sep) or host[:1] or os.curdir

        rest = host.strip(os.sep)
        if os.sep == "\\" and _DRIVE_COLON_RE.match(rest):
            # A drive colon is not valid inside a Windows path component.
            rest = rest[0] + rest[2:]
        # Normalized as absolute, so `..` stops at the sandbox root.
        rest = PathValue("/" + rest.replace(os.sep, "/")).normalize().raw.lstrip("/")
        rest = rest.replace("/", os.sep)
        if not rest:
            return root
        return root.rstrip(os.sep) + os.sep + rest

    def logical_path(self, actual: str) -> PathValue:
        """Map an actual path back to its logical form.

        Paths under the sandbox root become absolute logical paths with the
        root stripped; anything else is returned as written.
        """
        root = self.state.sandbox_root
        if root is not None:
            base = root.rstrip(os.sep)
            if actual == root or actual.startswith(base + os.sep):
                rest = actual[len(base) :].strip(os.sep)
                return PathValue("/" + rest.replace(os.sep, "/"))
        return PathValue(actual)

    # ========================================================================
    # Queries
    # ========================================================================

    def exists(self, path: str | PathValue) -> bool:
        """Check if a path exists. Missing paths report False."""
        return self.storage.exists(self.actual_path(path))

    def is_file(self, path: str | PathValue) -> bool:
        """Check if a path is a regular file."""
        return self.storage.is_file(self.actual_path(path))

    def is_dir(self, path: str | PathValue) -> bool:
        """Check if a path is a directory."""
        return self.storage.is_dir(self.actual_path(path))

    def resolve(self, path: str | PathValue) -> PathValue:
        """Get the canonical logical form of a path.

        Existing paths are canonicalized by storage and mapped back to
        logical form. If storage cannot canonicalize, the path is returned
        unchanged. Paths that do not exist are normalized lexically.

        Args:
            path: Logical path.

        Returns:
            Resolved logical PathValue.
        """
        path = _as_path(path)
        actual = self.actual_path(path)
        if not self.storage.exists(actual):
            return path.normalize()
        canonical = self.storage.canonicalize(actual)
        if canonical is None:
            return path
        return self.logical_path(canonical)

    def relative(self, path: str | PathValue, other: str | PathValue) -> PathValue:
        """Get the path leading from one resolved path to another."""
        return self.resolve(path).relative(self.resolve(other))

    # ========================================================================
    # File operations
    # ========================================================================

    def read_text(self, path: str | PathValue, encoding: str = "utf-8") -> str:
        """Read the full text content of a file.

        Args:
            path: Logical path to the file.
            encoding: Text encoding.

        Returns:
            File content.

        Raises:
            PathNotAFileError: If the path is missing or not a regular file.
            StorageError: If the read fails or the content cannot be decoded.
        """
        path = _as_path(path)
        actual = self.actual_path(path)
        if not self.storage.is_file(actual):
            raise PathNotAFileError(f"Path is not a file: {path}")
        try:
            return self.storage.read_all(actual, encoding=encoding)
        except OSError as e:
            raise StorageError(f"Could not read {path}: {_reason(e)}") from e
        except UnicodeError as e:
            raise StorageError(f"Could not decode {path} as {encoding}: {e}") from e

    def write_text(self, path: str | PathValue, content: str, encoding: str = "utf-8") -> None:
        """Write text to a file, creating missing parent directories.

        Existing content is replaced.

        Args:
            path: Logical path to the file.
            content: Text to write.
            encoding: Text encoding.

        Raises:
            StorageError: If a directory or the file cannot be written, or the
                content cannot be encoded.
        """
        path = _as_path(path)
        actual = self.actual_path(path)
        try:
            self._make_dirs(os.path.dirname(actual))
            self.storage.write_all(actual, content, encoding=encoding)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {_reason(e)}") from e
        except UnicodeError as e:
            raise StorageError(f"Could not encode {path} as {encoding}: {e}") from e

    def mkdir(self, path: str | PathValue, parents: bool = False, mode: int = 0o777) -> None:
        """Create a directory.

        An existing directory is left as is.

        Args:
            path: Logical path of the directory.
            parents: Create missing ancestors too.
            mode: Permission bits, ignored where unsupported.

        Raises:
            InvalidPathArgument: If a non-directory exists at the path.
            MissingParentError: If parents is False and the parent is missing.
            StorageError: If a directory cannot be created.
        """
        path = _as_path(path)
        actual = self.actual_path(path)
        if self.storage.is_dir(actual):
            return
        if self.storage.exists(actual):
            raise InvalidPathArgument(f"Path exists and is not a directory: {path}")
        parent = os.path.dirname(actual)
        if not parents and parent and not self.storage.is_dir(parent):
            raise MissingParentError(f"Parent directory does not exist: {path.parent()}")
        try:
            self._make_dirs(actual, mode)
        except OSError as e:
            raise StorageError(f"Could not create directory {path}: {_reason(e)}") from e

    def _make_dirs(self, actual: str, mode: int = 0o777) -> None:
        """Create a directory and every missing ancestor."""
        missing: list[str] = []
        current = actual
        while current and not self.storage.is_dir(current):
            missing.append(current)
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        for directory in reversed(missing):
            try:
                self.storage.mkdir(directory, mode)
            except FileExistsError:
                if not self.storage.is_dir(directory):
                    raise

    def iterdir(self, path: str | PathValue) -> Iterator[PathValue]:
        """Iterate over the entries of a directory.

        Entries are listed when this method is called. Order is whatever
        storage yields; sort explicitly if it matters.

        Args:
            path: Logical path of the directory.

        Returns:
            Iterator of logical paths, the directory joined with each name.

        Raises:
            PathNotADirectoryError: If the path is not a directory.
            StorageError: If the directory cannot be listed.
        """
        path = _as_path(path)
        actual = self.actual_path(path)
        if not self.storage.is_dir(actual):
            raise PathNotADirectoryError(f"Path is not a directory: {path}")
        try:
            names = self.storage.list_entries(actual)
        except OSError as e:
            raise StorageError(f"Could not list {path}: {_reason(e)}") from e
        return (path.joinpath(name) for name in names if name not in (".", ".."))

    def glob(self, path: str | PathValue, pattern: str | None = None) -> list[PathValue]:
        """Match entries directly inside a directory. Not recursive.

        For a directory, pattern (default `*`) is matched against its
        entries. For any other path with no pattern, the path's own name is
        used as the pattern against its siblings, so `/app/*.txt` works on
        its own.

        Args:
            path: Logical directory, or a logical path whose name is a pattern.
            pattern: Shell-style pattern.

        Returns:
            Matching logical paths in no guaranteed order. Empty if nothing
            matches.
        """
        path = _as_path(path)
        actual = self.actual_path(path)
        if self.storage.is_dir(actual):
            directory, actual_dir = path, actual
            pattern = pattern or "*"
        elif pattern is None:
            directory, actual_dir = path.parent(), os.path.dirname(actual)
            pattern = path.name()
        else:
            return []
        if not pattern:
            return []
        matches = self.storage.glob_match(actual_dir or os.curdir, pattern)
        return [directory.joinpath(match) for match in matches]

    # ========================================================================
    # Sandbox lifecycle
    # ========================================================================

    def begin_sandbox(self, prefix: str | None = None) -> SandboxGuard:
        """Redirect all actual paths into a fresh temporary directory.

        Args:
            prefix: Directory name prefix. Defaults to the gateway's prefix.

        Returns:
            Guard that ends the sandbox when released or when its `with`
            block exits.

        Raises:
            SandboxActiveError: If this gateway already has a sandbox.
            SandboxSetupError: If the directory cannot be created.
        """
        if self.state.sandbox_root is not None:
            raise SandboxActiveError(f"Sandbox already active at {self.state.sandbox_root}")

        name = (prefix or self.sandbox_prefix) + self.environment.random_unique_token()
        root = os.path.join(self.environment.system_temp_directory(), name)
        try:
            self.storage.mkdir(root, 0o700)
        except OSError as e:
            raise SandboxSetupError(f"Could not create sandbox directory {root}: {e}") from e

        # Must match canonicalize() output for logical_path().
        root = self.storage.canonicalize(root) or root
        self.state.sandbox_root = root
        logger.debug("Sandbox started at %s", root)
        return SandboxGuard(self, root)

    def end_sandbox(self) -> None:
        """Stop redirecting and delete the sandbox directory.

        Does nothing when no sandbox is active. Entries that cannot be
        deleted are logged and left behind.
        """
        root = self.state.sandbox_root
        if root is None:
            return
        self.state.sandbox_root = None
        leftovers = remove_tree(self.storage, root)
        if leftovers:
            logger.warning("Sandbox at %s left %d entries behind", root, len(leftovers))
        else:
            logger.debug("Sandbox at %s removed", root)
