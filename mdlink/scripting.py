"""User script overlay that can supply labels for URLs.

A script is a Python file defining ``render(url)``. It receives the parsed
:class:`~mdlink.models.Url` and returns a replacement label, or ``None`` to
decline.
"""

from __future__ import annotations

import hashlib
import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Callable, Optional

from .logging import get_logger
from .models import Url

_LOGGER = get_logger("scripting")

RENDER_FUNCTION = "render"


class ScriptLoadError(RuntimeError):
    """Raised when a user script cannot be loaded."""


class ScriptOverlay:
    """Wraps a ``render(url) -> str | None`` callable supplied by the user."""

    def __init__(self, render: Callable[[Url], Optional[str]], *, name: str = "<overlay>") -> None:
        self._render = render
        self.name = name

    @classmethod
    def from_path(cls, path: Path) -> "ScriptOverlay":
        """Load ``path`` as a module and wrap its ``render`` function."""
        path = Path(path).expanduser()
        if not path.is_file():
            raise ScriptLoadError(f"failed to load script: {path} does not exist")

        module = _load_module(path)
        render = getattr(module, RENDER_FUNCTION, None)
        if not callable(render):
            raise ScriptLoadError(
                f"failed to load script: {path} does not define a `{RENDER_FUNCTION}(url)` function"
            )
        return cls(render, name=str(path))

    def render(self, url: Url) -> Optional[str]:
        """Return the script's label for ``url``, or None when it declines or fails."""
        try:
            label = self._render(url)
        except Exception:
            _LOGGER.exception("script %s failed for %s", self.name, url.raw)
            return None
        if label is None:
            return None
        if not isinstance(label, str):
            _LOGGER.error(
                "script %s returned %s for %s; expected a string or None",
                self.name,
                type(label).__name__,
                url.raw,
            )
            return None
        return label or None


def _load_module(path: Path) -> ModuleType:
    digest = hashlib.sha256(str(path.resolve()).encode("utf-8")).hexdigest()[:12]
    spec = importlib.util.spec_from_file_location(f"mdlink_script_{digest}", path)
    if spec is None or spec.loader is None:
        raise ScriptLoadError(f"failed to load script: {path} is not a Python module")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ScriptLoadError(f"failed to load script {path}: {exc}") from exc
    _LOGGER.debug("loaded script overlay from %s", path)
    return module


__all__ = ["RENDER_FUNCTION", "ScriptLoadError", "ScriptOverlay"]
