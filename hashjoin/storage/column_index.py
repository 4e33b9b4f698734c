"""Column positions in the concatenated (joined) row shape.

A joined row is ``left_headers + right_headers[1:]``: the right key column is
dropped because it always equals the join key. When both sides declare the
same column name, the left position is the one that is indexed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from hashjoin.exceptions import UnknownColumnError

from .csv_table import PathLike, read_headers


def concatenated_headers(left_headers: Sequence[str], right_headers: Sequence[str]) -> List[str]:
    return list(left_headers) + list(right_headers[1:])


@dataclass(frozen=True)
class ColumnIndex:
    positions: Dict[str, int]
    full_headers: List[str]
    left_width: int
    right_width: int

    @classmethod
    def build(cls, left_headers: Sequence[str], right_headers: Sequence[str]) -> "ColumnIndex":
        positions: Dict[str, int] = {}
        for i, name in enumerate(left_headers):
            positions.setdefault(name, i)
        offset = len(left_headers)
        for i, name in enumerate(right_headers):
            if i == 0:
                continue
            positions.setdefault(name, offset + i - 1)
        return cls(
            positions=positions,
            full_headers=concatenated_headers(left_headers, right_headers),
            left_width=len(left_headers),
            right_width=len(right_headers),
        )

    @property
    def row_width(self) -> int:
        return len(self.full_headers)

    def position(self, name: str) -> Optional[int]:
        return self.positions.get(name)

    def missing(self, names: Iterable[str]) -> List[str]:
        return [name for name in names if name not in self.positions]

    def validate(self, names: Iterable[str]) -> None:
        """Raise for the first name that has no position."""
        missing = self.missing(names)
        if missing:
            raise UnknownColumnError(missing[0], available=self.positions)

    def project(self, full_row: Sequence[str], names: Sequence[str]) -> List[str]:
        """Pick ``names`` out of a full row; unresolvable names become ``""``."""
        projected = []
        for name in names:
            idx = self.positions.get(name)
            projected.append(full_row[idx] if idx is not None and idx < len(full_row) else "")
        return projected


def full_column_list(file1: PathLike, file2: PathLike) -> List[str]:
    """Column list a wildcard selection expands to, read from headers only."""
    return concatenated_headers(read_headers(file1), read_headers(file2))
