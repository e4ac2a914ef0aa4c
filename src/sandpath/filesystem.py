"""Host filesystem storage.

This module provides the production implementation of the Storage protocol.
RealFileSystem wraps standard library Path, os and glob operations.
"""

from __future__ import annotations

import glob
import os
import stat
from pathlib import Path


class RealFileSystem:
    """Production storage implementation.

    Wraps standard library Path and os operations on actual path strings.
    Satisfies the Storage protocol structurally.
    """

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        return os.path.isdir(path)

    def is_link(self, path: str) -> bool:
        """Check if a path is a symbolic link."""
        return os.path.islink(path)

    def read_all(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        return Path(path).read_text(encoding=encoding)

    def write_all(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        Path(path).write_text(content, encoding=encoding)

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        """Create a single directory."""
        Path(path).mkdir(mode=mode)

    def list_entries(self, path: str) -> list[str]:
        """List entry names in a directory."""
        return os.listdir(path)

    def glob_match(self, directory: str, pattern: str) -> list[str]:
        """Match a pattern against entries of a directory."""
        return glob.glob(pattern, root_dir=directory)

    def canonicalize(self, path: str) -> str | None:
        """Resolve symlinks and relative segments, None if impossible."""
        try:
            return str(Path(path).resolve(strict=True))
        except (OSError, RuntimeError):
            return None

    def remove_file(self, path: str) -> None:
        """Remove a file or symlink."""
        os.unlink(path)

    def remove_dir(self, path: str) -> None:
        """Remove an empty directory."""
        os.rmdir(path)

    def set_permissive(self, path: str) -> None:
        """Grant the owner full access to an entry."""
        # Link permissions are irrelevant for unlinking.
        if os.path.islink(path):
            return
        os.chmod(path, stat.S_IRWXU)
