"""Error hierarchy for sandpath operations."""

from __future__ import annotations


class SandpathError(Exception):
    """Base class for all sandpath errors."""

    pass


class InvalidPathArgument(SandpathError, ValueError):
    """Operation invoked on a path that cannot satisfy its precondition."""

    pass


class PathNotAFileError(InvalidPathArgument):
    """Path is not a regular file (missing or a directory)."""

    pass


class PathNotADirectoryError(InvalidPathArgument):
    """Path is not a directory."""

    pass


class StorageError(SandpathError, OSError):
    """Storage primitive failed although preconditions held."""

    pass


class MissingParentError(SandpathError):
    """Directory creation needs a parent that does not exist."""

    pass


class SandboxSetupError(SandpathError):
    """Sandbox directory could not be created."""

    pass


class SandboxActiveError(SandpathError):
    """A sandbox is already active on this gateway."""

    pass
