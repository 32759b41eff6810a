"""First-success-wins combinator used by every fallback chain."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from sysprobe.errors import MetricUnavailable, SourceUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

Attempt = tuple[str, Callable[[], T]]


@dataclass(slots=True, frozen=True)
class FirstSuccess(Generic[T]):
    """Value produced by the first attempt that did not fail."""

    value: T
    index: int
    name: str


def try_in_order(attempts: Sequence[Attempt[T]], *, metric: str) -> FirstSuccess[T]:
    """
    Run ``attempts`` in order and return the first successful result.

    Only :class:`SourceUnavailable` moves on to the next attempt; any other
    exception propagates. When every attempt fails a
    :class:`MetricUnavailable` listing each failure is raised.
    """
    failures: list[str] = []
    for index, (name, attempt) in enumerate(attempts):
        try:
            value = attempt()
        except SourceUnavailable as exc:
            logger.debug(f"{metric} source {name} unavailable: {exc}")
            failures.append(f"{name}: {exc}")
            continue
        return FirstSuccess(value=value, index=index, name=name)

    logger.warning(f"All {metric} sources exhausted: {'; '.join(failures)}")
    raise MetricUnavailable(metric, failures)
