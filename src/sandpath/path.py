"""Immutable logical path values.

PathValue holds a path string exactly as the caller wrote it and derives
everything else (segments, name, stem, suffix, parent) on demand. Both `/`
and `\\` are treated as separators; drive (`C:`) and UNC (`\\\\server\\share`)
prefixes are recognised before generic splitting. Nothing here touches
storage, except that `expand_user` asks the environment for a home directory.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, ConfigDict

from sandpath.environment import SystemEnvironment
from sandpath.errors import InvalidPathArgument

if TYPE_CHECKING:
    from sandpath.protocols import Environment

__all__ = ["SEPARATORS", "PathValue"]

SEPARATORS = "/\\"

_DRIVE_RE = re.compile(r"[A-Za-z]:(?=[/\\]|$)")
_UNC_RE = re.compile(r"[/\\]{2}([^/\\]+)[/\\]+([^/\\]+)")
_SPLIT_RE = re.compile(r"[/\\]+")


class _Anchor(NamedTuple):
    """Leading root of a path.

    Attributes:
        text: The anchor as written, including any root separators after it.
        prefix: Drive or UNC server/share tokens reported by parts().
    """

    text: str
    prefix: tuple[str, ...]


def _separator_run(raw: str, start: int) -> int:
    end = start
    while end < len(raw) and raw[end] in SEPARATORS:
        end += 1
    return end


def _split_anchor(raw: str) -> _Anchor:
    unc = _UNC_RE.match(raw)
    if unc:
        return _Anchor(raw[: _separator_run(raw, unc.end())], (unc.group(1), unc.group(2)))
    drive = _DRIVE_RE.match(raw)
    if drive:
        return _Anchor(raw[: _separator_run(raw, drive.end())], (drive.group(0),))
    return _Anchor(raw[: _separator_run(raw, 0)], ())


def _segments(raw: str, anchor: _Anchor | None = None) -> list[str]:
    anchor = anchor or _split_anchor(raw)
    return [s for s in _SPLIT_RE.split(raw[len(anchor.text) :]) if s]


def _dominant_separator(raw: str) -> str:
    """Backslash for paths written only with backslashes, else forward slash."""
    if "\\" in raw and "/" not in raw:
        return "\\"
    return "/"


def _text(value: str | PathValue) -> str:
    if isinstance(value, PathValue):
        return value.raw
    if isinstance(value, str):
        return value
    raise TypeError(f"Expected str or PathValue, got {type(value).__name__}")


class PathValue(BaseModel):
    """An immutable logical path.

    The raw string is never altered; every transformation returns a new
    PathValue. Equality compares raw strings, so `a/b` and `a//b` differ
    until normalized.

    Attributes:
        raw: The logical path string.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    raw: str = ""

    def __init__(self, raw: str = "") -> None:
        """Create a path from a string.

        Args:
            raw: Logical path in any separator convention. May be empty.
        """
        super().__init__(raw=raw)

    @classmethod
    def of(cls, raw: str) -> PathValue:
        """Create a path from a string."""
        return cls(raw)

    def __str__(self) -> str:
        return self.raw

    def __truediv__(self, segment: str | PathValue) -> PathValue:
        return self.joinpath(segment)

    def __lt__(self, other: PathValue) -> bool:
        if not isinstance(other, PathValue):
            return NotImplemented
        return self.raw < other.raw

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def parts(self) -> tuple[str, ...]:
        """Get the non-empty segments of the path.

        A drive contributes one leading segment (`C:`), a UNC prefix two
        (server, share). A POSIX root contributes nothing, so `/` has no
        parts. Trailing separators never produce an empty segment.

        Returns:
            Tuple of segments in order.

        Example:
            >>> PathValue("C:\\\\Users\\\\me\\\\file.txt").parts()
            ('C:', 'Users', 'me', 'file.txt')
        """
        anchor = _split_anchor(self.raw)
        return anchor.prefix + tuple(_segments(self.raw, anchor))

    def name(self) -> str:
        """Get the final segment, ignoring trailing separators.

        Returns:
            The last segment, or "" for an anchor-only or empty path.
        """
        segments = _segments(self.raw)
        return segments[-1] if segments else ""

    def _split_name(self) -> tuple[str, str]:
        name = self.name()
        dot = name.rfind(".")
        if dot <= 0 or name in (".", ".."):
            return name, ""
        return name[:dot], name[dot + 1 :]

    def stem(self) -> str:
        """Get the name without its final suffix.

        Dotfiles such as `.gitignore` are all stem.
        """
        return self._split_name()[0]

    def suffix(self) -> str:
        """Get the text after the last dot of the name, without the dot.

        Returns:
            The suffix, or "" when the name has none.

        Example:
            >>> PathValue("/a/archive.tar.gz").suffix()
            'gz'
        """
        return self._split_name()[1]

    def is_absolute(self) -> bool:
        """Check for a POSIX root, a drive or a UNC prefix."""
        return bool(_split_anchor(self.raw).text)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def _split_last(self) -> tuple[str, str] | None:
        """Split into everything before the final segment and the segment."""
        anchor = _split_anchor(self.raw)
        body = self.raw[len(anchor.text) :].rstrip(SEPARATORS)
        if not body:
            return None
        cut = max(body.rfind("/"), body.rfind("\\")) + 1
        return anchor.text + body[:cut], body[cut:]

    def parent(self) -> PathValue:
        """Get the logical parent.

        The parent of an anchor (`/`, `C:/`) is the anchor itself. The
        parent of a single relative segment or of the empty path is `.`.

        Returns:
            New PathValue for the parent directory.
        """
        anchor = _split_anchor(self.raw).text
        split = self._split_last()
        if split is None or len(split[0]) <= len(anchor):
            return PathValue(anchor or ".")
        return PathValue(split[0].rstrip(SEPARATORS))

    def joinpath(self, *segments: str | PathValue) -> PathValue:
        """Append segments, one separator between each.

        Separators at each joined boundary are trimmed, so
        `PathValue("/var/").joinpath("/www/")` gives `/var/www`.
        Segments that are empty after trimming are skipped.

        Args:
            *segments: Segments to append, which may contain separators.

        Returns:
            New PathValue with the segments appended.
        """
        joined = self.raw
        for segment in segments:
            text = _text(segment)
            if not joined:
                joined = text.rstrip(SEPARATORS) or text[:1]
                continue
            tail = text.strip(SEPARATORS)
            if not tail:
                continue
            joined = joined.rstrip(SEPARATORS) + _dominant_separator(joined) + tail
        return PathValue(joined)

    def with_name(self, name: str) -> PathValue:
        """Replace the final segment, keeping the parent.

        Args:
            name: New final segment.

        Returns:
            New PathValue with the name replaced.

        Raises:
            InvalidPathArgument: If the path has no name, or the new name is
                empty or contains a separator.
        """
        if not name or any(sep in name for sep in SEPARATORS):
            raise InvalidPathArgument(f"Invalid name: {name!r}")
        split = self._split_last()
        if split is None:
            raise InvalidPathArgument(f"Path has an empty name: {self.raw!r}")
        return PathValue(split[0] + name)

    def with_suffix(self, suffix: str) -> PathValue:
        """Replace the suffix, keeping the parent.

        Args:
            suffix: New suffix, with or without a leading dot. An empty
                suffix removes the current one.

        Returns:
            New PathValue with the suffix replaced.

        Raises:
            InvalidPathArgument: If the path has no name.
        """
        if not self.name():
            raise InvalidPathArgument(f"Path has an empty name: {self.raw!r}")
        if suffix.startswith("."):
            suffix = suffix[1:]
        stem = self.stem()
        return self.with_name(f"{stem}.{suffix}" if suffix else stem)

    def expand_user(self, environment: Environment | None = None) -> PathValue:
        """Replace a leading `~` with the home directory.

        Only a bare `~` or `~` followed by a separator is expanded.

        Args:
            environment: Source of the home directory. Defaults to the
                system environment.

        Returns:
            Expanded PathValue, or this one if there is nothing to expand
            or no home directory is known.
        """
        raw = self.raw
        if not raw.startswith("~") or (len(raw) > 1 and raw[1] not in SEPARATORS):
            return self
        home = (environment or SystemEnvironment()).home_directory()
        if not home:
            return self
        return PathValue((home.rstrip(SEPARATORS) + raw[1:]) or home)

    def normalize(self) -> PathValue:
        """Resolve `.` and `..` lexically, without touching storage.

        A `..` pops the previous segment. On absolute paths a `..` at the
        root is discarded; relative paths keep leading `..` segments. The
        result uses a single separator style and is `.` when a relative path
        normalizes to nothing.

        Returns:
            New normalized PathValue.

        Example:
            >>> PathValue("/a/b/../c/./d").normalize().raw
            '/a/c/d'
        """
        anchor = _split_anchor(self.raw)
        absolute = bool(anchor.text)
        stack: list[str] = []
        for segment in _segments(self.raw, anchor):
            if segment == ".":
                continue
            if segment == "..":
                if stack and stack[-1] != "..":
                    stack.pop()
                elif not absolute:
                    stack.append("..")
                continue
            stack.append(segment)

        sep = _dominant_separator(self.raw)
        body = sep.join(stack)
        if not absolute:
            return PathValue(body or ".")
        if len(anchor.prefix) == 2:
            share = sep * 2 + sep.join(anchor.prefix)
            return PathValue(f"{share}{sep}{body}" if body else share)
        drive = anchor.prefix[0] if anchor.prefix else ""
        return PathValue(f"{drive}{sep}{body}")

    def relative(self, other: str | PathValue) -> PathValue:
        """Get the lexical path leading from this path to another.

        Both paths are normalized first; no storage is consulted.

        Args:
            other: Destination path.

        Returns:
            Relative PathValue, `.` when both paths are the same.

        Example:
            >>> PathValue("/a/b").relative("/a/c/d").raw
            '../c/d'
        """
        source = [p for p in self.normalize().parts() if p != "."]
        target = [p for p in PathValue(_text(other)).normalize().parts() if p != "."]
        common = 0
        while common < min(len(source), len(target)) and source[common] == target[common]:
            common += 1
        steps = [".."] * (len(source) - common) + target[common:]
        return PathValue(_dominant_separator(self.raw).join(steps) or ".")
