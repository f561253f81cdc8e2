"""Tests for the user script overlay."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mdlink.models import Url
from mdlink.scripting import ScriptLoadError, ScriptOverlay


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_overlay_loads_render_function(tmp_path: Path) -> None:
    script = _write(
        tmp_path / "overlay.py",
        "def render(url):\n"
        "    if url.host == 'example.com':\n"
        "        return 'Example ' + '/'.join(url.path_segments)\n"
        "    return None\n",
    )

    overlay = ScriptOverlay.from_path(script)

    assert overlay.render(Url.parse("https://example.com/a/b")) == "Example a/b"
    assert overlay.render(Url.parse("https://other.test/")) is None


def test_missing_script_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(ScriptLoadError):
        ScriptOverlay.from_path(tmp_path / "absent.py")


def test_script_without_render_is_a_load_error(tmp_path: Path) -> None:
    script = _write(tmp_path / "empty.py", "VALUE = 1\n")

    with pytest.raises(ScriptLoadError):
        ScriptOverlay.from_path(script)


def test_script_with_syntax_error_is_a_load_error(tmp_path: Path) -> None:
    script = _write(tmp_path / "broken.py", "def render(url)\n    return 'x'\n")

    with pytest.raises(ScriptLoadError):
        ScriptOverlay.from_path(script)


def test_failures_decline_and_are_logged(caplog) -> None:
    def _render(url: Url) -> str:
        raise RuntimeError("boom")

    overlay = ScriptOverlay(_render, name="failing")

    with caplog.at_level(logging.ERROR, logger="mdlink"):
        assert overlay.render(Url.parse("https://example.com/")) is None

    assert "failing" in caplog.text
    assert "boom" in caplog.text


def test_non_string_and_empty_results_decline() -> None:
    assert ScriptOverlay(lambda url: 42).render(Url.parse("https://x.test/")) is None  # type: ignore[arg-type, return-value]
    assert ScriptOverlay(lambda url: "").render(Url.parse("https://x.test/")) is None
