"""Recognizer for the WebGPU conformance test suite runner."""

from __future__ import annotations

from ..config import ConfigLayer, Layered
from ..models import NOT_MATCHED, MatchOutcome, Matched, PathCursor, Url
from ..render import code, concat


def recognize_cts(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``cts/standalone/?q=<test path>``."""
    if path.take_exact(3) != ("cts", "standalone", ""):
        return NOT_MATCHED
    query = url.query("q")
    if not query:
        return NOT_MATCHED
    return Matched(concat("WebGPU CTS ", code(query)))


__all__ = ["recognize_cts"]
