"""Core data models shared across mdlink components."""

from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:
    from .render import Fragment

_SCHEME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_HOST_REQUIRED_SCHEMES = {"http", "https", "ws", "wss", "ftp"}


class UrlParseError(ValueError):
    """Raised when a line of input cannot be parsed as an absolute URL."""


@dataclass(frozen=True)
class Url:
    """Parsed, read-only view of an absolute URL."""

    raw: str
    scheme: str
    host: Optional[str]
    path_segments: Tuple[str, ...]
    query_pairs: Tuple[Tuple[str, str], ...]
    fragment: Optional[str]

    @classmethod
    def parse(cls, text: str) -> "Url":
        """Parse ``text`` into a :class:`Url`, raising :class:`UrlParseError` on failure."""
        raw = text.strip()
        if not raw:
            raise UrlParseError("empty input")
        try:
            parts = urllib.parse.urlsplit(raw)
            host = parts.hostname
            # Accessing the port validates it.
            parts.port
        except ValueError as exc:
            raise UrlParseError(str(exc)) from exc

        scheme = parts.scheme.lower()
        if not scheme or not _SCHEME_PATTERN.fullmatch(scheme):
            raise UrlParseError("relative URL without a base")
        if scheme in _HOST_REQUIRED_SCHEMES and not host:
            raise UrlParseError("empty host")

        path = parts.path
        if path.startswith("/"):
            segments = tuple(path[1:].split("/"))
        elif parts.netloc or not path:
            segments = ("",)
        else:
            segments = tuple(path.split("/"))

        return cls(
            raw=raw,
            scheme=scheme,
            host=host or None,
            path_segments=segments,
            query_pairs=tuple(urllib.parse.parse_qsl(parts.query, keep_blank_values=True)),
            fragment=parts.fragment if "#" in raw else None,
        )

    def query(self, key: str) -> Optional[str]:
        """Return the first value for ``key`` in the query string."""
        for name, value in self.query_pairs:
            if name == key:
                return value
        return None

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class PathCursor:
    """Immutable read position over a URL's path segments.

    Every read returns a new cursor, so a sub-pattern that fails to fit leaves
    the caller's cursor untouched.
    """

    segments: Tuple[str, ...]
    index: int = 0

    @classmethod
    def of(cls, url: Url) -> "PathCursor":
        return cls(url.path_segments)

    def is_empty(self) -> bool:
        return self.index >= len(self.segments)

    def remaining(self) -> Tuple[str, ...]:
        return self.segments[self.index :]

    def peek(self, count: int = 1) -> Optional[Tuple[str, ...]]:
        """Return the next ``count`` segments without advancing, or None if short."""
        end = self.index + count
        if end > len(self.segments):
            return None
        return self.segments[self.index : end]

    def take(self, count: int = 1) -> Optional[Tuple[Tuple[str, ...], "PathCursor"]]:
        """Return the next ``count`` segments and the advanced cursor, or None if short."""
        values = self.peek(count)
        if values is None:
            return None
        return values, PathCursor(self.segments, self.index + count)

    def advance(self, count: int = 1) -> "PathCursor":
        return PathCursor(self.segments, min(self.index + count, len(self.segments)))

    def take_exact(self, count: int) -> Optional[Tuple[str, ...]]:
        """Return the remaining segments only when exactly ``count`` are left."""
        if len(self.segments) - self.index != count:
            return None
        return self.remaining()


@dataclass(frozen=True)
class Matched:
    """A recognizer produced ``label`` for the URL."""

    label: "Fragment"

    def __str__(self) -> str:
        return str(self.label)


@dataclass(frozen=True)
class NotMatched:
    """No recognizer accepted the URL."""


NOT_MATCHED = NotMatched()

MatchOutcome = Union[Matched, NotMatched]


@dataclass(frozen=True)
class Single:
    """A single line number from a ``#L<n>`` fragment."""

    line: str


@dataclass(frozen=True)
class Range:
    """A line range from a ``#L<start>-L<end>`` fragment."""

    start: str
    end: str


LineNumberSpec = Union[Single, Range]


__all__ = [
    "LineNumberSpec",
    "MatchOutcome",
    "Matched",
    "NOT_MATCHED",
    "NotMatched",
    "PathCursor",
    "Range",
    "Single",
    "Url",
    "UrlParseError",
]
