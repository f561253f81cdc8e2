"""Tests for mdlink.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdlink.config import (
    CONFIG_ENV_VAR,
    Config,
    ConfigLayer,
    CreateDirectoryError,
    DeserializeError,
    InvalidProfileNameError,
    Layered,
    RepoPrefix,
    default_config_path,
    load_config,
    parse_config,
)

SAMPLE = """
[general.orgs.rust-lang]
unmatched-repo-prefix = "repo-only"

[general.orgs.rust-lang.repos.rust]
prefix = "org-and-repo"

[profiles.work.orgs.gfx-rs]
unmatched-repo-prefix = "none"
"""


def test_load_config_creates_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "mdlink" / "config.toml"

    config = load_config(path)

    assert path.exists()
    assert config == Config()
    assert config.general.orgs == {}
    assert config.profiles == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(SAMPLE, encoding="utf-8")

    config = load_config(path)

    org = config.general.orgs["rust-lang"]
    assert org.unmatched_repo_prefix is RepoPrefix.REPO_ONLY
    assert org.repos["rust"].prefix is RepoPrefix.ORG_AND_REPO
    assert config.profiles["work"].orgs["gfx-rs"].unmatched_repo_prefix is RepoPrefix.NONE


@pytest.mark.parametrize(
    "contents",
    [
        "unknown = 1",
        "[general]\nfoo = 1",
        "[general.orgs.a]\nunmatched_prefix = \"none\"",
        "[general.orgs.a.repos.b]\nprefix = \"everything\"",
        "[general.orgs.a.repos.b]\nprefix = \"none\"\nextra = true",
        "[general",
    ],
)
def test_parse_config_fails_closed(contents: str) -> None:
    with pytest.raises(DeserializeError):
        parse_config(contents)


def test_load_config_reports_directory_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(CreateDirectoryError):
        load_config(blocker / "config.toml")


def test_default_config_path_prefers_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.toml"))
    assert default_config_path() == tmp_path / "custom.toml"

    monkeypatch.delenv(CONFIG_ENV_VAR)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_path() == tmp_path / "mdlink" / "config.toml"


def test_layers_from_profile() -> None:
    config = parse_config(SAMPLE)

    general_only = config.layers_from_profile(None)
    assert general_only.profile is None
    assert list(general_only.inwards()) == [config.general]

    work = config.layers_from_profile("work")
    assert list(work.inwards()) == [config.profiles["work"], config.general]


def test_unknown_profile_is_reported() -> None:
    with pytest.raises(InvalidProfileNameError) as excinfo:
        Config().layers_from_profile("missing")

    assert excinfo.value.profile == "missing"


def test_layered_map_and_find() -> None:
    layers = Layered(general={"a": 1, "b": 2}, profile={"a": 10})

    assert layers.map(lambda layer: layer.get("a")).profile == 10
    assert layers.find(lambda layer: layer.get("a")) == 10
    assert layers.find(lambda layer: layer.get("b")) == 2
    assert layers.find(lambda layer: layer.get("c")) is None
    assert list(Layered(general=ConfigLayer()).inwards()) == [ConfigLayer()]
