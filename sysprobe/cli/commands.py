"""
Command-line interface for container resource probing.

Usage patterns:
    python -m sysprobe.cli.commands snapshot
    python -m sysprobe.cli.commands snapshot --command-only
    python -m sysprobe.cli.commands metric memory_usage_percent
    python -m sysprobe.cli.commands raw uptime
    python -m sysprobe.cli.commands connectivity example.com --port 443
"""

from __future__ import annotations

import argparse
import json

from sysprobe.config import get_config
from sysprobe.engine.resolver import (
    METRIC_ACCESSORS,
    RAW_OUTPUTS,
    ResourceResolver,
    create_resolver,
)
from sysprobe.errors import SysprobeError
from sysprobe.net.connectivity import check_connectivity


def main(argv: list[str] | None = None, *, resolver: ResourceResolver | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = get_config()

    if args.command == "connectivity":
        timeout = args.timeout if args.timeout is not None else config.connect_timeout
        report = check_connectivity(args.domain, args.port, timeout)
        print(json.dumps(report.to_dict(), indent=2))
        return

    engine = resolver if resolver is not None else create_resolver(config)
    try:
        if args.command == "snapshot":
            if args.command_only:
                snapshot = engine.resolve_snapshot_command_only()
            else:
                snapshot = engine.resolve_snapshot()
            print(snapshot.model_dump_json(indent=2))
        elif args.command == "metric":
            print(METRIC_ACCESSORS[args.name](engine))
        elif args.command == "raw":
            print(RAW_OUTPUTS[args.utility](engine), end="")
        else:  # pragma: no cover - argparse ensures command is valid
            parser.error(f"Unknown command: {args.command}")
    except SysprobeError as exc:
        raise SystemExit(f"error: {exc}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysprobe-cli",
        description="Report CPU and memory limits and usage for this container or host",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    snapshot = subparsers.add_parser(
        "snapshot", help="Resolve a full CPU and memory snapshot"
    )
    snapshot.add_argument(
        "--command-only",
        action="store_true",
        help="Skip container accounting files and use system commands only",
    )

    metric = subparsers.add_parser("metric", help="Resolve a single metric")
    metric.add_argument("name", choices=sorted(METRIC_ACCESSORS), help="Metric to report")

    raw = subparsers.add_parser("raw", help="Print unprocessed system utility output")
    raw.add_argument("utility", choices=sorted(RAW_OUTPUTS), help="Utility to run")

    connectivity = subparsers.add_parser(
        "connectivity", help="Check TCP and HTTP reachability of a domain"
    )
    connectivity.add_argument("domain", help="Host name or IP address to probe")
    connectivity.add_argument("--port", default="", help="Port to probe (default 80)")
    connectivity.add_argument(
        "--timeout",
        type=int,
        help="Timeout per check in seconds (default from SYSPROBE_CONNECT_TIMEOUT)",
    )

    return parser


if __name__ == "__main__":  # pragma: no cover - module execution guard
    main()
