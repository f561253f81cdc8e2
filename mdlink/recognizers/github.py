"""Recognizer for github.com repository, issue, file, commit and release links."""

from __future__ import annotations

from typing import Dict, Optional

from ..config import ConfigLayer, Layered, OrgEntry, RepoPrefix
from ..extract import parse_line_number_spec, split_component_version
from ..models import NOT_MATCHED, MatchOutcome, Matched, PathCursor, Url
from ..render import EMPTY, Fragment, code, concat, join, line_suffix

DEFAULT_REPO_PREFIX = RepoPrefix.ORG_AND_REPO


def resolve_repo_prefix(
    layers: Layered[ConfigLayer], org: str, repo: str
) -> RepoPrefix:
    """Resolve the prefix style for ``org/repo`` across configuration layers.

    A repo-specific ``prefix`` in any layer wins over the org's
    ``unmatched-repo-prefix`` in any layer, which wins over the default.
    """
    orgs = layers.map(lambda layer: layer.orgs)

    def _repo_prefix(entries: Dict[str, OrgEntry]) -> Optional[RepoPrefix]:
        org_entry = entries.get(org)
        if org_entry is None:
            return None
        repo_entry = org_entry.repos.get(repo)
        return None if repo_entry is None else repo_entry.prefix

    def _org_prefix(entries: Dict[str, OrgEntry]) -> Optional[RepoPrefix]:
        org_entry = entries.get(org)
        return None if org_entry is None else org_entry.unmatched_repo_prefix

    return orgs.find(_repo_prefix) or orgs.find(_org_prefix) or DEFAULT_REPO_PREFIX


def recognize(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    taken = path.take(2)
    if taken is None:
        return NOT_MATCHED
    (org, repo), rest = taken

    prefix = resolve_repo_prefix(layers, org, repo)
    org_and_repo = code(f"{org}/{repo}")
    repo_only = code(repo)

    if rest.is_empty():
        # Repo pages show only the prefix, so `none` leaves an empty label.
        repo_label = {
            RepoPrefix.ORG_AND_REPO: org_and_repo,
            RepoPrefix.REPO_ONLY: repo_only,
            RepoPrefix.NONE: EMPTY,
        }[prefix]
        return Matched(repo_label)

    repo_prefix: Fragment = {
        RepoPrefix.ORG_AND_REPO: org_and_repo,
        RepoPrefix.REPO_ONLY: repo_only,
        RepoPrefix.NONE: EMPTY,
    }[prefix]

    head = rest.peek(2)
    if head is not None and head[0] in ("issues", "pull"):
        return Matched(concat(repo_prefix, "#", head[1]))

    taken = rest.take(2)
    if taken is None:
        return NOT_MATCHED
    (kind, commitish), tail = taken

    if kind == "blob":
        file_path = "/".join(tail.remaining())
        commit_ref = join([repo_prefix, code(commitish)], ":")
        lines = parse_line_number_spec(url.fragment)
        return Matched(concat(commit_ref, ":", code(file_path), line_suffix(lines)))

    if kind == "commit":
        commit_ref = concat(org_and_repo, ":", code(commitish))
        if tail.is_empty():
            return Matched(commit_ref)
        return Matched(concat(commit_ref, ":", code("/".join(tail.remaining()))))

    if (kind, commitish) == ("releases", "tag"):
        return _recognize_release_tag(tail)

    return NOT_MATCHED


def _recognize_release_tag(path: PathCursor) -> MatchOutcome:
    remaining = path.remaining()
    if len(remaining) == 2 and remaining[1] == "":
        remaining = remaining[:1]
    if len(remaining) != 1:
        return NOT_MATCHED
    tag = remaining[0]

    component_version = split_component_version(tag)
    if component_version is not None:
        return Matched(
            concat(code(component_version.component), " ", component_version.version)
        )
    return Matched(concat(code(tag), " tag release"))


__all__ = ["DEFAULT_REPO_PREFIX", "recognize", "resolve_repo_prefix"]
