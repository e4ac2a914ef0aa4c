"""Module-level shortcuts bound to the process-wide gateway.

Each function delegates to `default_gateway()`. Code that needs isolation
from other callers should hold its own gateway from `create_gateway()`.
"""

from __future__ import annotations

from collections.abc import Iterator

from sandpath.context import default_gateway
from sandpath.path import PathValue
from sandpath.sandbox import SandboxGuard


def fake(prefix: str | None = None) -> SandboxGuard:
    """Start a sandbox on the process-wide gateway."""
    return default_gateway().begin_sandbox(prefix)


def stop_faking() -> None:
    """End the process-wide gateway's sandbox, if any."""
    default_gateway().end_sandbox()


def exists(path: str | PathValue) -> bool:
    return default_gateway().exists(path)


def is_file(path: str | PathValue) -> bool:
    return default_gateway().is_file(path)


def is_dir(path: str | PathValue) -> bool:
    return default_gateway().is_dir(path)


def read_text(path: str | PathValue, encoding: str = "utf-8") -> str:
    return default_gateway().read_text(path, encoding=encoding)


def write_text(path: str | PathValue, content: str, encoding: str = "utf-8") -> None:
    default_gateway().write_text(path, content, encoding=encoding)


def mkdir(path: str | PathValue, parents: bool = False, mode: int = 0o777) -> None:
    default_gateway().mkdir(path, parents=parents, mode=mode)


def iterdir(path: str | PathValue) -> Iterator[PathValue]:
    return default_gateway().iterdir(path)


def glob(path: str | PathValue, pattern: str | None = None) -> list[PathValue]:
    return default_gateway().glob(path, pattern)


def resolve(path: str | PathValue) -> PathValue:
    return default_gateway().resolve(path)
