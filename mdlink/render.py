"""Deferred text fragments used to assemble Markdown labels.

A :class:`Fragment` knows how to write itself into a text sink. Labels are
composed from fragments and only written out once a recognizer has decided the
URL fits, so optional pieces (line suffixes, comment suffixes, search terms)
contribute text or nothing without string concatenation at each call site.
"""

from __future__ import annotations

import io
from typing import Callable, Iterable, Optional, TextIO, Union

from .models import LineNumberSpec, Range, Single

Part = Union["Fragment", str, None]


class Fragment:
    """A piece of label text that is written on demand."""

    __slots__ = ("_writer",)

    def __init__(self, writer: Callable[[TextIO], None]) -> None:
        self._writer = writer

    def write_to(self, sink: TextIO) -> None:
        self._writer(sink)

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.write_to(buffer)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Fragment({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Fragment, str)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))


EMPTY = Fragment(lambda sink: None)


def _write_part(sink: TextIO, part: Part) -> None:
    if part is None:
        return
    if isinstance(part, Fragment):
        part.write_to(sink)
    else:
        sink.write(part)


def text(value: str) -> Fragment:
    return Fragment(lambda sink: sink.write(value))


def code(value: str) -> Fragment:
    """Wrap ``value`` in backticks."""

    def _write(sink: TextIO) -> None:
        sink.write("`")
        sink.write(value)
        sink.write("`")

    return Fragment(_write)


def concat(*parts: Part) -> Fragment:
    """Write each part in order; ``None`` parts are skipped."""

    def _write(sink: TextIO) -> None:
        for part in parts:
            _write_part(sink, part)

    return Fragment(_write)


def join(parts: Iterable[Part], separator: str) -> Fragment:
    """Write the non-``None`` parts separated by ``separator``."""
    present = [part for part in parts if part is not None]

    def _write(sink: TextIO) -> None:
        for index, part in enumerate(present):
            if index:
                sink.write(separator)
            _write_part(sink, part)

    return Fragment(_write)


def optional(value: Optional[str], render: Callable[[str], Part]) -> Fragment:
    """Render ``value`` through ``render`` when present, otherwise nothing."""
    if value is None:
        return EMPTY
    return concat(render(value))


def line_suffix(spec: Optional[LineNumberSpec]) -> Fragment:
    """``:<line>`` or ``:<start>-<end>``, or nothing without a spec."""
    if isinstance(spec, Single):
        return concat(":", spec.line)
    if isinstance(spec, Range):
        return concat(":", spec.start, "-", spec.end)
    return EMPTY


def comment_suffix(comment: Optional[str]) -> Fragment:
    return optional(comment, lambda number: concat(", comment ", number))


def markdown_link(label: Part, url: str) -> Fragment:
    return concat("[", label, "](", url, ")")


__all__ = [
    "EMPTY",
    "Fragment",
    "code",
    "comment_suffix",
    "concat",
    "join",
    "line_suffix",
    "markdown_link",
    "optional",
    "text",
]
