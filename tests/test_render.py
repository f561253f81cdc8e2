"""Tests for mdlink.render."""

from __future__ import annotations

import io

from mdlink.models import Range, Single
from mdlink.render import (
    EMPTY,
    code,
    comment_suffix,
    concat,
    join,
    line_suffix,
    markdown_link,
    optional,
    text,
)


def test_fragments_write_into_sink() -> None:
    sink = io.StringIO()
    concat(code("serde"), " ", text("v1.0.0")).write_to(sink)

    assert sink.getvalue() == "`serde` v1.0.0"


def test_join_skips_missing_parts() -> None:
    assert str(join([code("org/repo"), code("main")], ":")) == "`org/repo`:`main`"
    assert str(join([None, code("main")], ":")) == "`main`"


def test_optional_suffixes_contribute_nothing_when_absent() -> None:
    assert str(line_suffix(None)) == ""
    assert str(line_suffix(Single("7"))) == ":7"
    assert str(line_suffix(Range("1", "9"))) == ":1-9"
    assert str(comment_suffix(None)) == ""
    assert str(comment_suffix("3")) == ", comment 3"
    assert optional(None, text) is EMPTY


def test_markdown_link_wraps_label() -> None:
    link = markdown_link(concat("bug ", "1"), "https://bugzil.la/1")

    assert str(link) == "[bug 1](https://bugzil.la/1)"
    assert str(markdown_link(EMPTY, "https://x.test")) == "[](https://x.test)"


def test_fragments_compare_by_text() -> None:
    assert code("a") == "`a`"
    assert concat("a", "b") == text("ab")
