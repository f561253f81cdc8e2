"""URL classification and Markdown rendering."""

from __future__ import annotations

import io
from typing import Iterable, Iterator, Optional, TextIO

from .config import Config, ConfigLayer, Layered
from .logging import get_logger
from .models import NOT_MATCHED, MatchOutcome, Matched, PathCursor, Url, UrlParseError
from .recognizers import recognizers_for_host
from .render import markdown_link, text
from .scripting import ScriptOverlay

_LOGGER = get_logger("engine")

WEB_SCHEMES = frozenset({"http", "https"})
OVERLAY_FIRST = "first"
OVERLAY_LAST = "last"
OVERLAY_PRIORITIES = (OVERLAY_FIRST, OVERLAY_LAST)


def is_web_url(url: Url) -> bool:
    return url.scheme in WEB_SCHEMES and bool(url.host)


def classify(url: Url, layers: Layered[ConfigLayer]) -> MatchOutcome:
    """Run the built-in recognizers registered for the URL's host.

    Each recognizer gets a fresh cursor over the path; the first match wins.
    """
    if not is_web_url(url):
        return NOT_MATCHED
    assert url.host is not None
    for recognizer in recognizers_for_host(url.host):
        outcome = recognizer(url, PathCursor.of(url), layers)
        if isinstance(outcome, Matched):
            _LOGGER.debug("%s matched %s", recognizer.__name__, url.raw)
            return outcome
    return NOT_MATCHED


class Engine:
    """Classifies URLs under one effective configuration and renders them."""

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        profile: Optional[str] = None,
        overlay: Optional[ScriptOverlay] = None,
        overlay_priority: str = OVERLAY_LAST,
    ) -> None:
        if overlay_priority not in OVERLAY_PRIORITIES:
            raise ValueError(
                f"overlay priority must be one of {', '.join(OVERLAY_PRIORITIES)}, "
                f"not {overlay_priority!r}"
            )
        self.config = config or Config()
        self.profile = profile
        self.layers = self.config.layers_from_profile(profile)
        self.overlay = overlay
        self.overlay_priority = overlay_priority

    def classify(self, url: Url) -> MatchOutcome:
        if self.overlay_priority == OVERLAY_FIRST:
            outcome = self._classify_with_overlay(url)
            if isinstance(outcome, Matched):
                return outcome

        outcome = classify(url, self.layers)
        if isinstance(outcome, Matched):
            return outcome

        if self.overlay_priority == OVERLAY_LAST:
            return self._classify_with_overlay(url)
        return NOT_MATCHED

    def _classify_with_overlay(self, url: Url) -> MatchOutcome:
        if self.overlay is None:
            return NOT_MATCHED
        label = self.overlay.render(url)
        if label is None:
            return NOT_MATCHED
        return Matched(text(label))

    def write_url(self, url: Url, sink: TextIO) -> None:
        """Write the rendered form of ``url`` into ``sink``.

        Matched URLs become ``[label](url)``, unmatched web URLs become an
        ``<url>`` autolink, and any other scheme is written verbatim.
        """
        outcome = self.classify(url)
        if isinstance(outcome, Matched):
            markdown_link(outcome.label, url.raw).write_to(sink)
        elif is_web_url(url):
            sink.write(f"<{url.raw}>")
        else:
            sink.write(url.raw)

    def render_url(self, url: Url) -> str:
        buffer = io.StringIO()
        self.write_url(url, buffer)
        return buffer.getvalue()

    def render_line(self, line: str, *, line_number: Optional[int] = None) -> Optional[str]:
        """Render one line of input, or return None when it is not a URL."""
        try:
            url = Url.parse(line)
        except UrlParseError as exc:
            if line_number is None:
                _LOGGER.warning("failed to parse %r as a URL: %s", line, exc)
            else:
                _LOGGER.warning("line %d: failed to parse %r as a URL: %s", line_number, line, exc)
            return None
        return self.render_url(url)

    def render_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """Render lines in order, dropping the ones that are not URLs."""
        for line_number, line in enumerate(lines, start=1):
            rendered = self.render_line(line, line_number=line_number)
            if rendered is not None:
                yield rendered


__all__ = [
    "Engine",
    "OVERLAY_FIRST",
    "OVERLAY_LAST",
    "OVERLAY_PRIORITIES",
    "classify",
    "is_web_url",
]
