"""Immutable path values with sandboxable filesystem access."""

__version__ = "0.1.0"

from sandpath.context import create_gateway, default_gateway, reset_default_gateway
from sandpath.errors import (
    InvalidPathArgument,
    MissingParentError,
    PathNotADirectoryError,
    PathNotAFileError,
    SandboxActiveError,
    SandboxSetupError,
    SandpathError,
    StorageError,
)
from sandpath.gateway import FilesystemGateway
from sandpath.path import PathValue
from sandpath.sandbox import SandboxGuard

__all__ = [
    "__version__",
    "FilesystemGateway",
    "InvalidPathArgument",
    "MissingParentError",
    "PathNotADirectoryError",
    "PathNotAFileError",
    "PathValue",
    "SandboxActiveError",
    "SandboxGuard",
    "SandboxSetupError",
    "SandpathError",
    "StorageError",
    "create_gateway",
    "default_gateway",
    "reset_default_gateway",
]
