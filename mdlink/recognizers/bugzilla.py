"""Recognizers for Mozilla's issue and code review trackers."""

from __future__ import annotations

from ..config import ConfigLayer, Layered
from ..extract import is_diff_revision, parse_bug_comment
from ..models import NOT_MATCHED, MatchOutcome, Matched, PathCursor, Url
from ..render import comment_suffix, concat, text


def recognize_bug(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``/<id>`` and ``/show_bug.cgi?id=<id>`` bug links."""
    segments = path.take_exact(1)
    if segments is None:
        return NOT_MATCHED
    (segment,) = segments

    if segment == "show_bug.cgi":
        bug_id = url.query("id")
    else:
        bug_id = segment
    if not bug_id:
        return NOT_MATCHED

    if bug_id.isascii() and bug_id.isdigit():
        bug = concat("bug ", bug_id)
    else:
        bug = concat('bug "', bug_id, '"')
    return Matched(concat(bug, comment_suffix(parse_bug_comment(url.fragment))))


def recognize_phabricator(
    url: Url, path: PathCursor, layers: Layered[ConfigLayer]
) -> MatchOutcome:
    """Match ``/differential/diff/<id>`` and ``/D<digits>`` revision links."""
    remaining = path.remaining()
    if len(remaining) == 4 and remaining[3] == "":
        remaining = remaining[:3]

    if len(remaining) == 3 and remaining[:2] == ("differential", "diff") and remaining[2]:
        return Matched(concat("diff ", remaining[2]))

    if len(remaining) == 1 and is_diff_revision(remaining[0]):
        return Matched(text(remaining[0]))

    return NOT_MATCHED


__all__ = ["recognize_bug", "recognize_phabricator"]
