"""Convert links to well-known services into compact Markdown links."""

from .config import Config, ConfigLayer, InvalidProfileNameError, Layered, RepoPrefix, load_config
from .engine import Engine, classify
from .models import NOT_MATCHED, Matched, NotMatched, PathCursor, Url, UrlParseError
from .scripting import ScriptOverlay

__all__ = [
    "Config",
    "ConfigLayer",
    "Engine",
    "InvalidProfileNameError",
    "Layered",
    "Matched",
    "NOT_MATCHED",
    "NotMatched",
    "PathCursor",
    "RepoPrefix",
    "ScriptOverlay",
    "Url",
    "UrlParseError",
    "classify",
    "load_config",
]
