from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TextIO, Union

from hashjoin.io import atomic_output
from hashjoin.observability import JoinMetrics, MetricsHook
from hashjoin.query.model import Query


class JoinStrategy(ABC):
    """Abstract base class for join strategies.

    Implementations write the CSV result for a query to a text stream and
    return the run's :class:`JoinMetrics`.
    """

    name: str = "base"

    def __init__(self, on_metrics: Optional[MetricsHook] = None) -> None:
        self.on_metrics = on_metrics

    @abstractmethod
    def execute_to_writer(self, query: Query, writer: TextIO) -> JoinMetrics:
        ...

    def execute_to_file(self, query: Query, path: Union[str, Path]) -> JoinMetrics:
        with atomic_output(path) as handle:
            return self.execute_to_writer(query, handle)
