"""
sysprobe package initialization.

This package answers "how much CPU and memory may this process use, and how
much is it using?" from inside a container or on a bare host, with CLI, API,
and UI facets over a single resolution engine.
"""

__all__ = [
    "api",
    "cli",
    "config",
    "engine",
    "errors",
    "host",
    "net",
    "parsers",
    "probes",
    "ui",
]
