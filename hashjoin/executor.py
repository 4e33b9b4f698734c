"""Execution driver: pick the strategy for a query and route its output."""

from __future__ import annotations

import io
import logging
import sys
from typing import Dict, Optional, TextIO

from hashjoin.exceptions import OutputWriteError
from hashjoin.observability import JoinMetrics, MetricsHook
from hashjoin.query.model import Query
from hashjoin.strategies import JoinStrategy, list_strategies, resolve_strategy

logger = logging.getLogger(__name__)


def describe_strategies() -> Dict[str, str]:
    """Strategy names accepted in commands, with their status."""
    return list_strategies()


def _write_stdout(strategy: JoinStrategy, query: Query, stdout: Optional[TextIO]) -> JoinMetrics:
    buffer = io.StringIO(newline="")
    metrics = strategy.execute_to_writer(query, buffer)
    target = stdout if stdout is not None else sys.stdout
    try:
        target.write(buffer.getvalue())
        target.flush()
    except OSError as exc:
        raise OutputWriteError("cannot write result to stdout", path="<stdout>", original_error=exc) from exc
    return metrics


def execute_query(
    query: Query,
    *,
    stdout: Optional[TextIO] = None,
    on_metrics: Optional[MetricsHook] = None,
) -> JoinMetrics:
    """Run ``query`` with the strategy it names.

    Stdout results are buffered and written in one piece once the join has
    finished. File results are written to a temp file and moved into place,
    so a failed run never leaves a partial result behind.

    Args:
        query: Parsed query
        stdout: Stream used for stdout targets (defaults to ``sys.stdout``)
        on_metrics: Callback receiving the run's metrics

    Returns:
        Metrics of the completed run

    Raises:
        UnknownStrategyError: If the strategy name is not registered
        StrategyNotImplementedError: If the strategy is a placeholder
        HashJoinError: Any failure raised by the strategy, unchanged
    """
    strategy = resolve_strategy(query.strategy_name, on_metrics=on_metrics)
    logger.info(
        "Running %s join of %s and %s with strategy '%s'",
        query.join_kind.value,
        query.file1,
        query.file2,
        strategy.name,
    )

    output_path = query.output.path
    if output_path is None:
        metrics = _write_stdout(strategy, query, stdout)
    else:
        metrics = strategy.execute_to_file(query, output_path)

    logger.info("Result written to %s (%d rows)", query.output.describe(), metrics.rows_emitted)
    return metrics
