"""In-memory hash join.

Both sources are loaded into key -> row tables, the candidate key set is chosen
from the join kind, and each key is resolved into a full joined row (with empty
padding for a missing side) before projection.
"""

from __future__ import annotations

import logging
import time
from typing import Iterator, List, Optional, Sequence, TextIO

from hashjoin.io import write_csv_rows
from hashjoin.observability import JoinMetrics, emit_metrics
from hashjoin.query.model import JoinKind, Query
from hashjoin.storage.column_index import ColumnIndex
from hashjoin.storage.csv_table import CsvTable, Row, load_table

from .base import JoinStrategy
from .registry import register_strategy

logger = logging.getLogger(__name__)


def candidate_keys(join_kind: JoinKind, left: CsvTable, right: CsvTable) -> List[str]:
    """Keys to emit, in left-then-right insertion order."""
    if join_kind is JoinKind.INNER:
        return [key for key in left.rows if key in right.rows]
    if join_kind is JoinKind.LEFT:
        return list(left.rows)
    if join_kind is JoinKind.RIGHT:
        return list(right.rows)
    return list(left.rows) + [key for key in right.rows if key not in left.rows]


def resolve_full_row(
    join_kind: JoinKind,
    left_row: Optional[Row],
    right_row: Optional[Row],
    left_width: int,
    right_width: int,
) -> Optional[List[str]]:
    """Build ``left_row + right_row[1:]``, padding a missing side with ``""``.

    A missing left side still carries the key in the first column, so a
    right-only key shows up as ``3,,40`` rather than ``,,40``.

    Returns None when the join kind drops a key that lacks one side.
    """
    if left_row is None and not join_kind.keeps_unmatched_right:
        return None
    if right_row is None and not join_kind.keeps_unmatched_left:
        return None
    if left_row is not None:
        left_part = list(left_row)
    else:
        left_part = [right_row[0]] + [""] * (left_width - 1)
    right_part = list(right_row[1:]) if right_row is not None else [""] * (right_width - 1)
    return left_part + right_part


@register_strategy("in_memory")
class InMemoryJoin(JoinStrategy):
    name = "in_memory"

    def _load(self, path: str, side: str) -> CsvTable:
        started = time.perf_counter()
        table = load_table(path)
        logger.info(
            "Loaded %s source %s: %d rows, %d columns in %.3fs",
            side,
            path,
            table.key_count,
            table.width,
            time.perf_counter() - started,
        )
        return table

    def _joined_rows(
        self,
        query: Query,
        left: CsvTable,
        right: CsvTable,
        index: ColumnIndex,
        selected: Sequence[str],
    ) -> Iterator[List[str]]:
        for key in candidate_keys(query.join_kind, left, right):
            full_row = resolve_full_row(
                query.join_kind, left.get(key), right.get(key), index.left_width, index.right_width
            )
            if full_row is None:
                continue
            yield index.project(full_row, selected)

    def execute_to_writer(self, query: Query, writer: TextIO) -> JoinMetrics:
        started = time.perf_counter()
        left = self._load(query.file1, "left")
        right = self._load(query.file2, "right")

        index = ColumnIndex.build(left.headers, right.headers)
        if query.is_wildcard:
            selected = list(index.full_headers)
        else:
            selected = list(query.columns)
            index.validate(selected)
        logger.debug("Projection: %s", selected)

        emitted = write_csv_rows(
            writer, selected, self._joined_rows(query, left, right, index, selected)
        )

        metrics = JoinMetrics(
            strategy=self.name,
            join_kind=query.join_kind.value,
            left_rows=left.key_count,
            right_rows=right.key_count,
            rows_emitted=emitted,
            elapsed_seconds=time.perf_counter() - started,
        )
        emit_metrics(metrics, self.on_metrics)
        return metrics
