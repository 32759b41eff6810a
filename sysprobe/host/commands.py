"""
System utility execution.

Probes receive a :class:`CommandRunner` so tests can substitute canned
output; :func:`run_command` is the real implementation backed by
``subprocess``. The raw-output helpers return unprocessed text for callers
that want to inspect the utilities themselves.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import Protocol

from sysprobe.errors import CommandUnavailable

from .family import OsFamily

logger = logging.getLogger(__name__)

LOAD_MONITOR_COMMANDS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.LINUX: ("top", "-b", "-n", "1"),
    OsFamily.DARWIN: ("top", "-l", "1"),
}
MEMORY_MONITOR_COMMANDS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.LINUX: ("free", "-b"),
    OsFamily.DARWIN: ("vm_stat",),
}
PROCESS_LIST_COMMAND = ("ps", "aux")
UPTIME_COMMAND = ("uptime",)


class CommandRunner(Protocol):
    """Callable that runs a command and returns its standard output."""

    def __call__(self, args: Sequence[str]) -> str:
        ...


def run_command(args: Sequence[str]) -> str:
    """Run ``args`` without a shell and return decoded stdout."""
    command = list(args)
    logger.debug(f"Running command: {' '.join(command)}")
    try:
        completed = subprocess.run(command, capture_output=True, check=True)
    except FileNotFoundError as exc:
        raise CommandUnavailable(command, "command not found") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
        reason = f"exit status {exc.returncode}"
        if stderr:
            reason = f"{reason}: {stderr}"
        raise CommandUnavailable(command, reason) from exc
    except OSError as exc:
        raise CommandUnavailable(command, str(exc)) from exc
    return completed.stdout.decode("utf-8", errors="replace")


def load_monitor_output(family: OsFamily, runner: CommandRunner = run_command) -> str:
    return runner(LOAD_MONITOR_COMMANDS[family])


def memory_monitor_output(family: OsFamily, runner: CommandRunner = run_command) -> str:
    return runner(MEMORY_MONITOR_COMMANDS[family])


def process_list_output(runner: CommandRunner = run_command) -> str:
    return runner(PROCESS_LIST_COMMAND)


def uptime_output(runner: CommandRunner = run_command) -> str:
    return runner(UPTIME_COMMAND)
