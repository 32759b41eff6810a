"""Host access primitives: file readers, command execution, OS family."""

from .commands import CommandRunner, run_command
from .family import OsFamily
from .readers import exists, read_text

__all__ = ["CommandRunner", "OsFamily", "exists", "read_text", "run_command"]
