"""Pytest configuration and fixtures."""

import csv
import io
import logging
from pathlib import Path
from typing import Callable, List, Sequence

import pytest


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write raw CSV text to ``tmp_path / name`` and return the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def people_csv(write_csv) -> Path:
    return write_csv("people.csv", "id,name\n1,Alice\n2,Bob\n")


@pytest.fixture
def ages_csv(write_csv) -> Path:
    return write_csv("ages.csv", "id,age\n2,30\n3,40\n")


@pytest.fixture
def read_rows() -> Callable[[str], List[List[str]]]:
    """Parse CSV text back into rows."""

    def _read(text: str) -> List[List[str]]:
        return list(csv.reader(io.StringIO(text)))

    return _read


@pytest.fixture
def sorted_body() -> Callable[[Sequence[Sequence[str]]], List[List[str]]]:
    """Data rows (header dropped) in sorted order, for order-independent checks."""

    def _sorted(rows: Sequence[Sequence[str]]) -> List[List[str]]:
        return sorted(list(row) for row in rows[1:])

    return _sorted


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo handler changes made by setup_logging() inside a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
