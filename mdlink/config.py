"""Configuration loading for mdlink (config.toml) and layered lookups."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Generic, Iterator, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .logging import get_logger

CONFIG_ENV_VAR = "MDLINK_CONFIG"
CONFIG_FILE_NAME = "config.toml"

_LOGGER = get_logger("config")

T = TypeVar("T")
U = TypeVar("U")


class ConfigReadError(RuntimeError):
    """Raised when the configuration file cannot be loaded."""


class CreateDirectoryError(ConfigReadError):
    """The configuration directory could not be created."""


class CreateFileError(ConfigReadError):
    """The configuration file did not exist and could not be created."""


class OpenFileError(ConfigReadError):
    """The configuration file exists but could not be opened."""


class ReadFileError(ConfigReadError):
    """The configuration file could not be read or decoded."""


class DeserializeError(ConfigReadError):
    """The configuration file is not valid TOML for the expected schema."""


class InvalidProfileNameError(LookupError):
    """Raised when a requested profile is not defined in the configuration."""

    def __init__(self, profile: str) -> None:
        super().__init__(f"unrecognized profile name: {profile!r}")
        self.profile = profile


class RepoPrefix(str, Enum):
    """How the `org/repo` prefix of a repository link is shown."""

    ORG_AND_REPO = "org-and-repo"
    REPO_ONLY = "repo-only"
    NONE = "none"


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class RepoEntry(_Model):
    prefix: Optional[RepoPrefix] = None


class OrgEntry(_Model):
    unmatched_repo_prefix: Optional[RepoPrefix] = Field(
        default=None, alias="unmatched-repo-prefix"
    )
    repos: Dict[str, RepoEntry] = Field(default_factory=dict)


class ConfigLayer(_Model):
    """A single layer of configuration: `general` or one named profile."""

    orgs: Dict[str, OrgEntry] = Field(default_factory=dict)


class Config(_Model):
    """Top-level mdlink configuration."""

    general: ConfigLayer = Field(default_factory=ConfigLayer)
    profiles: Dict[str, ConfigLayer] = Field(default_factory=dict)

    def layers_from_profile(self, profile: Optional[str] = None) -> "Layered[ConfigLayer]":
        """Return the layers applicable to ``profile``, most specific first.

        Raises :class:`InvalidProfileNameError` when ``profile`` is named but
        not defined.
        """
        if profile is None:
            return Layered(general=self.general)
        layer = self.profiles.get(profile)
        if layer is None:
            raise InvalidProfileNameError(profile)
        return Layered(general=self.general, profile=layer)


@dataclass(frozen=True)
class Layered(Generic[T]):
    """A general value with an optional, more specific profile override."""

    general: T
    profile: Optional[T] = None

    def map(self, f: Callable[[T], U]) -> "Layered[U]":
        return Layered(
            general=f(self.general),
            profile=None if self.profile is None else f(self.profile),
        )

    def inwards(self) -> Iterator[T]:
        """Iterate layers from most to least specific."""
        if self.profile is not None:
            yield self.profile
        yield self.general

    def find(self, f: Callable[[T], Optional[U]]) -> Optional[U]:
        """Return the first non-None result of ``f`` over :meth:`inwards`."""
        for layer in self.inwards():
            value = f(layer)
            if value is not None:
                return value
        return None


def default_config_path() -> Path:
    """Return the config file path from the environment or platform conventions."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
    base = Path(config_home).expanduser() if config_home else Path("~/.config").expanduser()
    return base / "mdlink" / CONFIG_FILE_NAME


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from disk, creating an empty file when none exists."""
    path = config_path or default_config_path()

    _LOGGER.debug("ensuring that config. directory is created at path %s", path.parent)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CreateDirectoryError(
            f"failed to ensure that config. directory was created at {path.parent}: {exc}"
        ) from exc

    _LOGGER.debug("ensuring that config. file is created at path %s", path)
    if not path.exists():
        try:
            path.touch()
        except OSError as exc:
            raise CreateFileError(
                f"failed to ensure that config. file was created at {path}: {exc}"
            ) from exc

    try:
        handle = path.open("rb")
    except OSError as exc:
        raise OpenFileError(f"failed to open config. file {path}: {exc}") from exc
    with handle:
        try:
            contents = handle.read().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadFileError(f"failed to read config. file {path}: {exc}") from exc

    return parse_config(contents, source=str(path))


def parse_config(contents: str, *, source: str = "<string>") -> Config:
    """Parse TOML ``contents`` into a validated :class:`Config`."""
    try:
        data = tomllib.loads(contents)
        return Config.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as exc:
        raise DeserializeError(
            f"failed to deserialize config. file contents of {source} as TOML: {exc}"
        ) from exc


__all__ = [
    "CONFIG_ENV_VAR",
    "Config",
    "ConfigLayer",
    "ConfigReadError",
    "CreateDirectoryError",
    "CreateFileError",
    "DeserializeError",
    "InvalidProfileNameError",
    "Layered",
    "OpenFileError",
    "OrgEntry",
    "ReadFileError",
    "RepoEntry",
    "RepoPrefix",
    "default_config_path",
    "load_config",
    "parse_config",
]
