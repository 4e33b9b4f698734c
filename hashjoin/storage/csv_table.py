"""CSV source loading into keyed in-memory tables.

The first row of a source is its header. Every later row is keyed by its first
field; a later row with the same key replaces the earlier one, so a table holds
at most one row per key. Every row must have exactly as many fields as the
header.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from hashjoin.exceptions import SourceReadError

logger = logging.getLogger(__name__)

Row = Tuple[str, ...]
PathLike = Union[str, Path]

# Every cell is read as text and nothing is treated as missing, so "NA",
# "null" and "" survive unchanged.
_READ_OPTIONS = {
    "header": None,
    "dtype": str,
    "keep_default_na": False,
    "na_filter": False,
    "skip_blank_lines": True,
    "encoding": "utf-8",
}


@dataclass
class CsvTable:
    """Headers plus rows keyed by the value of the first column."""

    path: str
    headers: List[str]
    rows: Dict[str, Row] = field(default_factory=dict)
    duplicate_keys: int = 0

    @property
    def width(self) -> int:
        return len(self.headers)

    @property
    def key_count(self) -> int:
        return len(self.rows)

    def get(self, key: str) -> Optional[Row]:
        return self.rows.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.rows


def _read_frame(path: str, **options) -> pd.DataFrame:
    try:
        return pd.read_csv(path, **{**_READ_OPTIONS, **options})
    except FileNotFoundError as exc:
        raise SourceReadError(f"source not found: {path}", source=path, original_error=exc) from exc
    except pd.errors.EmptyDataError as exc:
        raise SourceReadError(f"source has no header row: {path}", source=path, original_error=exc) from exc
    except pd.errors.ParserError as exc:
        raise SourceReadError(f"malformed CSV in {path}", source=path, original_error=exc) from exc
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise SourceReadError(f"cannot read source {path}", source=path, original_error=exc) from exc


def _check_record_widths(path: str, width: int) -> None:
    """Raise for the first record whose field count differs from the header.

    pandas fills missing trailing fields with empty strings and drops
    whitespace-only lines, so record widths are counted on the raw file.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            for record in reader:
                if record and len(record) != width:
                    raise SourceReadError(
                        f"malformed CSV in {path}: line {reader.line_num} has {len(record)} field(s), header has {width}",
                        source=path,
                    )
    except (OSError, csv.Error) as exc:
        raise SourceReadError(f"cannot read source {path}", source=path, original_error=exc) from exc


def read_headers(path: PathLike) -> List[str]:
    """Return the header row of a CSV source without loading its data."""
    path_str = str(path)
    frame = _read_frame(path_str, nrows=1)
    if frame.empty:
        raise SourceReadError(f"source has no header row: {path_str}", source=path_str)
    return [str(name) for name in frame.iloc[0].fillna("").tolist()]


def load_table(path: PathLike) -> CsvTable:
    """Read a CSV source into a :class:`CsvTable`.

    Args:
        path: CSV file to read

    Returns:
        Table with the raw header names and one row per distinct key

    Raises:
        SourceReadError: If the file is missing, empty, unreadable or has a row
            whose field count differs from the header
    """
    path_str = str(path)
    frame = _read_frame(path_str)
    if frame.empty:
        raise SourceReadError(f"source has no header row: {path_str}", source=path_str)

    frame = frame.fillna("")
    records = frame.itertuples(index=False, name=None)
    headers = [str(name) for name in next(records)]
    _check_record_widths(path_str, len(headers))

    table = CsvTable(path=path_str, headers=headers)
    loaded = 0
    for record in records:
        row: Row = tuple(str(value) for value in record)
        key = row[0]
        if key in table.rows:
            table.duplicate_keys += 1
        table.rows[key] = row
        loaded += 1

    if table.duplicate_keys:
        logger.warning(
            "%s: %d row(s) share a key with an earlier row; the last row per key is kept",
            path_str,
            table.duplicate_keys,
        )
    logger.debug("Read %d data rows (%d keys, %d columns) from %s", loaded, table.key_count, table.width, path_str)
    return table
