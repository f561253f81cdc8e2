"""Small grammars parsed out of URL fragments and path segments."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from .models import LineNumberSpec, Range, Single

LINE_NUMBER_SPEC = r"L(?P<start>\d+)(?:-L(?P<end>\d+))?"
COMPONENT_VERSION = r"(?P<component>.+)-(?P<version>v\d+(?:\.\d+){0,2})"
DOC_SYMBOL = r"(?P<kind>[a-z_]+)\.(?P<name>[^.]+)\.html"
FRAGMENT_MEMBER = r"(?P<kind>[a-z_]+)\.(?P<name>[^.]+)"
BUG_COMMENT = r"c(?P<comment>\d+)"
DIFF_REVISION = r"D\d+"


class _PatternCache:
    """Process-wide table of compiled patterns, each compiled at most once."""

    def __init__(self) -> None:
        self._compiled: Dict[str, re.Pattern[str]] = {}
        self._lock = threading.Lock()

    def get(self, pattern: str) -> re.Pattern[str]:
        compiled = self._compiled.get(pattern)
        if compiled is not None:
            return compiled
        with self._lock:
            compiled = self._compiled.get(pattern)
            if compiled is None:
                compiled = re.compile(pattern)
                self._compiled[pattern] = compiled
        return compiled

    def __len__(self) -> int:
        return len(self._compiled)


PATTERNS = _PatternCache()


def required_group(match: re.Match[str], name: str) -> str:
    """Return an unconditional capture group, which must exist once matched."""
    value = match.group(name)
    if value is None:
        raise AssertionError(
            f"matched {match.re.pattern!r}, but unconditional `{name}` capture not found"
        )
    return value


def parse_line_number_spec(fragment: Optional[str]) -> Optional[LineNumberSpec]:
    """Parse the first ``L10`` or ``L10-L20`` found in a fragment."""
    if not fragment:
        return None
    match = PATTERNS.get(LINE_NUMBER_SPEC).search(fragment)
    if match is None:
        return None
    start = required_group(match, "start")
    end = match.group("end")
    if end is None:
        return Single(start)
    return Range(start, end)


@dataclass(frozen=True)
class ComponentVersion:
    component: str
    version: str


def split_component_version(tag: str) -> Optional[ComponentVersion]:
    """Find a ``<component>-v<major>[.<minor>[.<patch>]]`` version inside a release tag."""
    match = PATTERNS.get(COMPONENT_VERSION).search(tag)
    if match is None:
        return None
    return ComponentVersion(
        component=required_group(match, "component"),
        version=required_group(match, "version"),
    )


@dataclass(frozen=True)
class DocSymbol:
    """A documented item parsed from a rustdoc page name such as ``struct.Vec.html``."""

    kind: str
    name: str


def split_doc_symbol(segment: str) -> Optional[DocSymbol]:
    match = PATTERNS.get(DOC_SYMBOL).fullmatch(segment)
    if match is None:
        return None
    return DocSymbol(kind=required_group(match, "kind"), name=required_group(match, "name"))


def split_fragment_member(fragment: Optional[str]) -> Optional[str]:
    """Return the identifier of a ``method.len``-style fragment."""
    if not fragment:
        return None
    match = PATTERNS.get(FRAGMENT_MEMBER).fullmatch(fragment)
    if match is None:
        return None
    return required_group(match, "name")


def parse_bug_comment(fragment: Optional[str]) -> Optional[str]:
    if not fragment:
        return None
    match = PATTERNS.get(BUG_COMMENT).fullmatch(fragment)
    if match is None:
        return None
    return required_group(match, "comment")


def is_diff_revision(segment: str) -> bool:
    return PATTERNS.get(DIFF_REVISION).fullmatch(segment) is not None


__all__ = [
    "ComponentVersion",
    "DocSymbol",
    "PATTERNS",
    "is_diff_revision",
    "parse_bug_comment",
    "parse_line_number_spec",
    "required_group",
    "split_component_version",
    "split_doc_symbol",
    "split_fragment_member",
]
