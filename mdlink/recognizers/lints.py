"""Recognizer for the Clippy lint catalog on rust-lang.github.io."""

from __future__ import annotations

from ..config import ConfigLayer, Layered
from ..models import NOT_MATCHED, MatchOutcome, Matched, PathCursor, Url
from ..render import code, concat

LINT_TOOLS = {"rust-clippy": "clippy"}
RELEASE_STAGES = frozenset({"master", "stable", "beta"})


def recognize_lint(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``rust-clippy/<stage>/index.html`` with an optional lint or search fragment."""
    segments = path.take_exact(3)
    if segments is None:
        return NOT_MATCHED
    site, stage, page = segments
    tool = LINT_TOOLS.get(site)
    if tool is None or stage not in RELEASE_STAGES or page != "index.html":
        return NOT_MATCHED

    catalog = concat(code(tool), " lints in ", code(stage))
    fragment = url.fragment or ""
    if not fragment:
        return Matched(catalog)
    if fragment.startswith("/"):
        term = fragment[1:]
        if not term:
            return Matched(catalog)
        return Matched(concat(catalog, " matching ", code(term)))
    return Matched(concat(code(f"{tool}::{fragment}"), " in ", code(stage)))


__all__ = ["LINT_TOOLS", "RELEASE_STAGES", "recognize_lint"]
