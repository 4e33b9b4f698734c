"""Instrumentation hooks for join execution.

Strategies report a :class:`JoinMetrics` record once the result is written.
Callers can pass their own callback; the default one logs the numbers.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable, Optional

from hashjoin.logging_config import log_performance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinMetrics:
    strategy: str
    join_kind: str
    left_rows: int
    right_rows: int
    rows_emitted: int
    elapsed_seconds: float

    def to_dict(self) -> dict:
        return asdict(self)


MetricsHook = Callable[[JoinMetrics], None]


def log_metrics(metrics: JoinMetrics) -> None:
    """Default hook: report the run through ``log_performance``."""
    fields = metrics.to_dict()
    duration = fields.pop("elapsed_seconds")
    log_performance(logger, f"{metrics.strategy}_join", duration, **fields)


def emit_metrics(metrics: JoinMetrics, hook: Optional[MetricsHook]) -> None:
    (hook or log_metrics)(metrics)
