"""Structured representation of a parsed join command."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from hashjoin.config.settings import DEFAULT_OUTPUT_FILE, DEFAULT_STRATEGY
from hashjoin.exceptions import QueryParseError

WILDCARD = "*"


class JoinKind(str, Enum):
    """Supported join kinds."""

    INNER = "inner"
    LEFT = "left"
    RIGHT = "right"
    FULL = "full"

    @classmethod
    def choices(cls) -> List[str]:
        return [kind.value for kind in cls]

    @classmethod
    def parse(cls, value: str) -> "JoinKind":
        """Map a join keyword (``LEFT``, ``left outer``, ...) to a kind."""
        words = value.split()
        if len(words) == 2 and words[1].lower() == "outer" and words[0].lower() != cls.INNER.value:
            words = words[:1]
        if len(words) == 1:
            candidate = words[0].lower()
            for kind in cls:
                if kind.value == candidate:
                    return kind
        raise QueryParseError(f"unknown join type: {value}", fragment=value)

    @property
    def keeps_unmatched_left(self) -> bool:
        return self in (JoinKind.LEFT, JoinKind.FULL)

    @property
    def keeps_unmatched_right(self) -> bool:
        return self in (JoinKind.RIGHT, JoinKind.FULL)


@dataclass(frozen=True)
class OutputTarget:
    """Where the result goes: a file path, or stdout when ``path`` is None."""

    path: Optional[str] = None

    @classmethod
    def stdout(cls) -> "OutputTarget":
        return cls(None)

    @classmethod
    def file(cls, path: str) -> "OutputTarget":
        return cls(path)

    @classmethod
    def from_clause(cls, clause: Optional[str], default_file: str = DEFAULT_OUTPUT_FILE) -> "OutputTarget":
        """Resolve the text after ``>`` into a target.

        ``None`` (no redirect at all) selects ``default_file``; an empty clause
        selects stdout; a path ending in a separator is a directory that gets
        ``default_file`` appended.
        """
        if clause is None:
            return cls.file(default_file)
        clause = clause.strip()
        if not clause:
            return cls.stdout()
        if clause.endswith(("/", "\\")):
            return cls.file(f"{clause}{default_file}")
        return cls.file(clause)

    @property
    def is_stdout(self) -> bool:
        return self.path is None

    def describe(self) -> str:
        return "<stdout>" if self.path is None else self.path


@dataclass(frozen=True)
class Query:
    columns: Tuple[str, ...]
    file1: str
    file2: str
    join_kind: JoinKind
    strategy_name: str = DEFAULT_STRATEGY
    output: OutputTarget = field(default_factory=lambda: OutputTarget.file(DEFAULT_OUTPUT_FILE))

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the query stays hashable
        object.__setattr__(self, "columns", tuple(self.columns))
        if not self.columns:
            raise QueryParseError("column list cannot be empty")
        if not self.file1 or not self.file2:
            raise QueryParseError("exactly two sources required")

    @property
    def is_wildcard(self) -> bool:
        return len(self.columns) == 1 and self.columns[0] == WILDCARD

    @property
    def sources(self) -> Tuple[str, str]:
        return self.file1, self.file2
