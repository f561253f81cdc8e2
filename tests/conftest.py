from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

import pytest

from mdlink.config import Config, parse_config
from mdlink.engine import Engine


@pytest.fixture(autouse=True)
def _reset_mdlink_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog sees records from every test."""
    yield
    logger = logging.getLogger("mdlink")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def render() -> Callable[..., Optional[str]]:
    """Render a single input line with an optional TOML configuration and profile."""

    def _render(line: str, *, config: str = "", profile: Optional[str] = None) -> Optional[str]:
        engine = Engine(parse_config(config) if config else Config(), profile=profile)
        return engine.render_line(line)

    return _render
