"""Streaming strategy that would hash only the smaller source.

Only the query checks exist so far; execution always fails.
"""

from __future__ import annotations

from typing import TextIO

from hashjoin.exceptions import StrategyError, StrategyNotImplementedError
from hashjoin.observability import JoinMetrics
from hashjoin.query.model import WILDCARD, JoinKind, Query

from .base import JoinStrategy
from .registry import register_strategy


@register_strategy("only_smallest", "stream_processing")
class OnlySmallestJoin(JoinStrategy):
    name = "only_smallest"

    def execute_to_writer(self, query: Query, writer: TextIO) -> JoinMetrics:
        if query.join_kind is not JoinKind.INNER:
            raise StrategyError(
                f"strategy '{self.name}' supports only inner joins, got '{query.join_kind.value}'",
                strategy=query.strategy_name,
            )
        if WILDCARD in query.columns:
            raise StrategyError(
                f"strategy '{self.name}' does not support SELECT *",
                strategy=query.strategy_name,
            )
        raise StrategyNotImplementedError(
            f"strategy '{self.name}' is not implemented, use 'in_memory'",
            strategy=query.strategy_name,
        )
