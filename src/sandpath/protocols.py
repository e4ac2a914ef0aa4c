"""Protocol definitions for the external collaborators.

The gateway never touches the host directly. It talks to two interfaces:
- Storage: primitive filesystem operations on actual path strings
- Environment: home directory, temp root and unique-name lookups

All concrete implementations satisfy these protocols structurally (duck typing),
so tests can substitute doubles without inheritance.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Storage(Protocol):
    """Protocol for storage primitives.

    Every method takes an actual path string, already rebased and
    host-normalized by the gateway. Single-level operations only; the
    gateway composes them into parent creation and tree removal.
    """

    def exists(self, path: str) -> bool:
        """Check if a path exists.

        Args:
            path: Actual path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file.

        Args:
            path: Actual path to check.

        Returns:
            True if path is a file, False otherwise.
        """
        ...

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory.

        Args:
            path: Actual path to check.

        Returns:
            True if path is a directory, False otherwise.
        """
        ...

    def is_link(self, path: str) -> bool:
        """Check if a path is a symbolic link.

        Args:
            path: Actual path to check.

        Returns:
            True if path is a symlink, False otherwise.
        """
        ...

    def read_all(self, path: str, encoding: str = "utf-8") -> str:
        """Read the full text content of a file.

        Args:
            path: Actual path to the file.
            encoding: Text encoding.

        Returns:
            File content as string.

        Raises:
            OSError: If the file cannot be read.
        """
        ...

    def write_all(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file, replacing any existing content.

        The parent directory must already exist.

        Args:
            path: Actual path to the file.
            content: Content to write.
            encoding: Text encoding.

        Raises:
            OSError: If the file cannot be written.
        """
        ...

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        """Create a single directory level.

        Args:
            path: Actual path to create.
            mode: Permission bits, ignored where unsupported.

        Raises:
            OSError: If the directory cannot be created.
        """
        ...

    def list_entries(self, path: str) -> list[str]:
        """List entry names in a directory.

        Args:
            path: Actual directory path.

        Returns:
            Bare entry names, excluding the self/parent pseudo-entries.

        Raises:
            OSError: If the directory cannot be listed.
        """
        ...

    def glob_match(self, directory: str, pattern: str) -> list[str]:
        """Match a pattern against entries directly inside a directory.

        Args:
            directory: Actual directory path.
            pattern: Shell-style pattern.

        Returns:
            Matching names relative to the directory. Empty if none match
            or the directory is missing.
        """
        ...

    def canonicalize(self, path: str) -> str | None:
        """Resolve a path to its canonical real form.

        Args:
            path: Actual path.

        Returns:
            Canonical path, or None if it cannot be canonicalized.
        """
        ...

    def remove_file(self, path: str) -> None:
        """Remove a file or symlink.

        Args:
            path: Actual path to remove.
        """
        ...

    def remove_dir(self, path: str) -> None:
        """Remove an empty directory.

        Args:
            path: Actual path to remove.
        """
        ...

    def set_permissive(self, path: str) -> None:
        """Force an entry's permissions open so it can be deleted.

        Args:
            path: Actual path.
        """
        ...


@runtime_checkable
class Environment(Protocol):
    """Protocol for process environment lookups."""

    def home_directory(self) -> str | None:
        """Get the current user's home directory.

        Returns:
            Home directory path, or None if it cannot be determined.
        """
        ...

    def system_temp_directory(self) -> str:
        """Get the root directory for temporary files.

        Returns:
            Temporary directory path.
        """
        ...

    def random_unique_token(self) -> str:
        """Generate a token suitable for collision-free directory names.

        Returns:
            Random token containing only filename-safe characters.
        """
        ...
