"""
Entry point enabling both CLI probing and FastAPI service startup.

Running behaviours:
    python -m sysprobe snapshot
    python -m sysprobe cli metric cpu_usage_percent
    python -m sysprobe serve --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from sysprobe.cli import commands
from sysprobe.config import get_config

_CLI_COMMANDS = {"snapshot", "metric", "raw", "connectivity"}


def main(argv: Sequence[str] | None = None) -> None:
    args = list(argv if argv is not None else sys.argv[1:])
    _configure_logging()
    if not args:
        _build_parser().print_help()
        return

    if args[0] in _CLI_COMMANDS:
        commands.main(args)
        return

    parser = _build_parser()
    parsed = parser.parse_args(args)

    if parsed.entrypoint == "cli":
        if not parsed.cli_args:
            parser.error("No CLI command provided. Try 'sysprobe cli snapshot'.")
        commands.main(list(parsed.cli_args))
        return

    if parsed.entrypoint == "serve":
        _run_api(host=parsed.host, port=parsed.port, reload=parsed.reload)
        return

    parser.print_help()


def _configure_logging() -> None:
    level = getattr(logging, get_config().log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysprobe",
        description="Container resource probe entry point.",
    )
    subparsers = parser.add_subparsers(dest="entrypoint")

    serve = subparsers.add_parser(
        "serve", help="Start the FastAPI service via uvicorn."
    )
    serve.add_argument("--host", default="127.0.0.1", help="Host interface to bind.")
    serve.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (development only).",
    )

    cli = subparsers.add_parser(
        "cli",
        help="Forward to the probing CLI commands.",
    )
    cli.add_argument(
        "cli_args",
        nargs=argparse.REMAINDER,
        help="Arguments passed through to the CLI (e.g. snapshot, metric).",
    )

    return parser


def _run_api(*, host: str, port: int, reload: bool) -> None:
    import uvicorn

    if reload:
        uvicorn.run("sysprobe.api.router:app", host=host, port=port, reload=True)
        return

    from sysprobe.api.router import create_app

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":  # pragma: no cover - module execution guard
    main()
