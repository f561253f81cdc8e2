"""CLI entrypoints for mdlink commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, TextIO

from .config import Config, ConfigReadError, InvalidProfileNameError, load_config
from .engine import OVERLAY_LAST, OVERLAY_PRIORITIES, Engine
from .logging import configure_logging
from .scripting import ScriptLoadError, ScriptOverlay


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdlink",
        description="Convert links to well-known services into compact Markdown links.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.toml (defaults to $MDLINK_CONFIG or the user config directory).",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="Configuration profile to layer over the general settings.",
    )
    parser.add_argument(
        "--script",
        type=Path,
        default=None,
        help="Python file defining render(url) that may supply labels.",
    )
    parser.add_argument(
        "--script-priority",
        choices=OVERLAY_PRIORITIES,
        default=OVERLAY_LAST,
        help="Consult the script before or after the built-in recognizers (default: last).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    stdin_parser = subparsers.add_parser(
        "from-stdin",
        help="Render every line read from standard input.",
    )
    _add_verbose_option(stdin_parser, suppress_default=True)

    args_parser = subparsers.add_parser(
        "from-args",
        help="Render each URL given on the command line.",
    )
    _add_verbose_option(args_parser, suppress_default=True)
    args_parser.add_argument("urls", nargs="*", help="URLs to render.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the renderer over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint for mdlink commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(args.config)
    except ConfigReadError as exc:
        print(f"mdlink: {exc}", file=sys.stderr)
        return 1

    overlay: Optional[ScriptOverlay] = None
    if args.script is not None:
        try:
            overlay = ScriptOverlay.from_path(args.script)
        except ScriptLoadError as exc:
            print(f"mdlink: {exc}", file=sys.stderr)
            return 1

    try:
        engine = Engine(
            config,
            profile=args.profile,
            overlay=overlay,
            overlay_priority=args.script_priority,
        )
    except InvalidProfileNameError as exc:
        print(f"mdlink: {exc}", file=sys.stderr)
        return 1

    if args.command == "from-stdin":
        _render_to(engine, _stdin_lines(sys.stdin), sys.stdout)
    elif args.command == "from-args":
        _render_to(engine, args.urls, sys.stdout)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(
            _engine_factory(config, overlay, args.script_priority),
            host=args.host,
            port=args.port,
        )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")
    return 0


def _render_to(engine: Engine, lines: Iterable[str], sink: TextIO) -> None:
    """Write one rendered line per parseable input line, preserving order."""
    for rendered in engine.render_lines(lines):
        sink.write(rendered)
        sink.write("\n")


def _stdin_lines(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield line.rstrip("\r\n")


def _engine_factory(config: Config, overlay: Optional[ScriptOverlay], priority: str):
    def _factory(profile: Optional[str]) -> Engine:
        return Engine(config, profile=profile, overlay=overlay, overlay_priority=priority)

    return _factory


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
