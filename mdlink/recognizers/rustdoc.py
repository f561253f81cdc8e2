"""Recognizers for the Rust package registry and rustdoc-generated documentation."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config import ConfigLayer, Layered
from ..extract import split_doc_symbol, split_fragment_member
from ..models import NOT_MATCHED, MatchOutcome, Matched, PathCursor, Url
from ..render import code, concat

RELEASE_CHANNELS = frozenset({"stable", "beta", "nightly"})
STD_CRATES = frozenset({"std", "core", "alloc", "proc_macro", "test"})
MODULE_INDEX_PAGES = frozenset({"", "index.html"})


def recognize_crate(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``crates.io/crates/<name>/<version>``."""
    segments = path.take_exact(3)
    if segments is None:
        return NOT_MATCHED
    section, name, version = segments
    if section != "crates" or not name or not version:
        return NOT_MATCHED
    if not version.startswith("v"):
        version = f"v{version}"
    return Matched(concat(code(name), " ", version))


def recognize_docs_rs(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``docs.rs/<name>/<version>/<name>/...`` item pages."""
    taken = path.take(3)
    if taken is None:
        return NOT_MATCHED
    (package, version, module), rest = taken
    if not package or not version or module != package.replace("-", "_"):
        return NOT_MATCHED
    symbol_path = resolve_symbol_path(module, rest.remaining(), url.fragment)
    if symbol_path is None:
        return NOT_MATCHED
    return Matched(code(symbol_path))


def recognize_std_docs(url: Url, path: PathCursor, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Match ``doc.rust-lang.org/[<channel>/]<std crate>/...`` item pages."""
    head = path.peek(1)
    if head is not None and head[0] in RELEASE_CHANNELS:
        path = path.advance(1)

    taken = path.take(1)
    if taken is None:
        return NOT_MATCHED
    (crate,), rest = taken
    if crate not in STD_CRATES:
        return NOT_MATCHED
    symbol_path = resolve_symbol_path(crate, rest.remaining(), url.fragment)
    if symbol_path is None:
        return NOT_MATCHED
    return Matched(code(symbol_path))


def resolve_symbol_path(
    crate: str, segments: Sequence[str], fragment: Optional[str]
) -> Optional[str]:
    """Build a ``::``-joined item path from rustdoc path segments.

    ``segments`` are module directories followed by a page name, either a
    module index (``index.html`` or empty) or ``<kind>.<Name>.html``. A
    ``<kind>.<member>`` fragment names a method, field or variant of the item.
    Primitive types are addressed without their crate. Returns None when the
    page is not an item or module page.
    """
    if not segments:
        return crate

    *modules, page = segments
    if any(not module for module in modules):
        return None

    parts: List[str] = [crate, *modules]
    if page in MODULE_INDEX_PAGES:
        return "::".join(parts)

    symbol = split_doc_symbol(page)
    if symbol is None:
        return None
    if symbol.kind == "primitive":
        parts = parts[1:]
    parts.append(symbol.name)

    member = split_fragment_member(fragment)
    if member is not None:
        parts.append(member)
    return "::".join(parts)


__all__ = [
    "RELEASE_CHANNELS",
    "STD_CRATES",
    "recognize_crate",
    "recognize_docs_rs",
    "recognize_std_docs",
    "resolve_symbol_path",
]
