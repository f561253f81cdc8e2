"""Recognizers for Mozilla code search, CI and Mercurial links."""

from __future__ import annotations

from ..config import ConfigLayer, Layered
from ..models import NOT_MATCHED, MatchOutcome, Matched, PathCursor, Url
from ..render import code, concat, optional

SEARCHFOX_REPOS = frozenset(
    {
        "mozilla-central",
        "mozilla-beta",
        "mozilla-release",
        "mozilla-esr115",
        "mozilla-esr128",
        "mozilla-mobile",
        "firefox-main",
        "comm-central",
        "l10n",
        "nss",
        "wubkat",
    }
)
REVISION_DISPLAY_LEN = 12


def recognize_searchfox(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``<repo>/source/<path>`` and ``<repo>/rev/<rev>/<path>``."""
    taken = path.take(2)
    if taken is None:
        return NOT_MATCHED
    (repo, mode), rest = taken
    if repo not in SEARCHFOX_REPOS:
        return NOT_MATCHED

    revision = None
    if mode == "rev":
        taken = rest.take(1)
        if taken is None:
            return NOT_MATCHED
        (revision,), rest = taken
    elif mode != "source":
        return NOT_MATCHED

    file_path = "/".join(rest.remaining())
    if not file_path:
        return NOT_MATCHED

    return Matched(
        concat(
            code(repo),
            optional(revision, lambda rev: concat(":", code(rev))),
            ":",
            code(file_path),
            optional(url.fragment or None, lambda fragment: concat(":", fragment)),
        )
    )


def recognize_treeherder(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``/jobs?repo=<repo>&revision=<rev>`` push links."""
    if path.take_exact(1) != ("jobs",):
        return NOT_MATCHED
    repo = url.query("repo")
    revision = url.query("revision")
    if repo is None or revision is None:
        return NOT_MATCHED
    return Matched(concat(code(repo), " push ", code(revision[:REVISION_DISPLAY_LEN])))


def recognize_hg(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``<repo>/rev/<hash>``."""
    segments = path.take_exact(3)
    if segments is None:
        return NOT_MATCHED
    repo, marker, revision = segments
    if marker != "rev" or not repo or not revision:
        return NOT_MATCHED
    return Matched(concat(code(repo), ":", code(revision)))


__all__ = [
    "REVISION_DISPLAY_LEN",
    "SEARCHFOX_REPOS",
    "recognize_hg",
    "recognize_searchfox",
    "recognize_treeherder",
]
