"""Parser for the join command language.

Grammar (keywords are case-insensitive)::

    SELECT <columns | *> FROM <file1>, <file2> HASHJOIN <join-kind> [<strategy>] [> [<output>]]

The command is split into tokens first; a recursive-descent parser then walks
the fixed keyword structure. Column names and paths may contain spaces, so list
items are sliced back out of the original text by token offsets.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from hashjoin.config.settings import DEFAULT_OUTPUT_FILE, DEFAULT_STRATEGY
from hashjoin.exceptions import QueryParseError

from .model import WILDCARD, JoinKind, OutputTarget, Query

logger = logging.getLogger(__name__)

WORD = "word"
COMMA = "comma"
REDIRECT = "redirect"

_IDENTIFIER = re.compile(r"\w+")
_SPECIAL = {",": COMMA, ">": REDIRECT}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start: int
    end: int

    def is_keyword(self, keyword: str) -> bool:
        return self.kind == WORD and self.text.upper() == keyword


def tokenize(command: str) -> List[Token]:
    """Split ``command`` into words, commas and ``>`` markers."""
    tokens: List[Token] = []
    pos = 0
    length = len(command)
    while pos < length:
        char = command[pos]
        if char.isspace():
            pos += 1
            continue
        if char in _SPECIAL:
            tokens.append(Token(_SPECIAL[char], char, pos, pos + 1))
            pos += 1
            continue
        start = pos
        while pos < length and not command[pos].isspace() and command[pos] not in _SPECIAL:
            pos += 1
        tokens.append(Token(WORD, command[start:pos], start, pos))
    return tokens


class _CommandParser:
    def __init__(self, command: str, default_strategy: str, default_output: str) -> None:
        self.command = command
        self.tokens = tokenize(command)
        self.pos = 0
        self.default_strategy = default_strategy
        self.default_output = default_output

    def _unsupported(self) -> QueryParseError:
        return QueryParseError("unsupported command", fragment=self.command)

    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _expect_keyword(self, keyword: str) -> Token:
        token = self._peek()
        if token is None or not token.is_keyword(keyword):
            raise self._unsupported()
        return self._advance()

    def _identifier(self) -> Optional[Token]:
        token = self._peek()
        if token is None or token.kind != WORD:
            return None
        if not _IDENTIFIER.fullmatch(token.text):
            raise self._unsupported()
        return self._advance()

    def _item_list(self, terminator: str) -> List[str]:
        """Comma separated items up to (not including) ``terminator``."""
        items: List[str] = []
        first: Optional[Token] = None
        last: Optional[Token] = None
        while True:
            token = self._peek()
            if token is None or token.kind == REDIRECT:
                raise self._unsupported()
            if token.is_keyword(terminator) or token.kind == COMMA:
                items.append(self.command[first.start:last.end] if first and last else "")
                first = last = None
                if token.kind != COMMA:
                    return items
                self._advance()
                continue
            token = self._advance()
            if first is None:
                first = token
            last = token

    def parse(self) -> Query:
        self._expect_keyword("SELECT")
        column_items = self._item_list("FROM")
        self._expect_keyword("FROM")
        source_items = self._item_list("HASHJOIN")
        self._expect_keyword("HASHJOIN")

        join_token = self._identifier()
        if join_token is None:
            raise self._unsupported()
        join_text = join_token.text
        following = self._peek()
        if following is not None and following.is_keyword("OUTER"):
            join_text = f"{join_text} {self._advance().text}"

        strategy_token = self._identifier()
        strategy_name = strategy_token.text if strategy_token else self.default_strategy

        output_clause: Optional[str] = None
        token = self._peek()
        if token is not None:
            if token.kind != REDIRECT:
                raise self._unsupported()
            output_clause = self.command[token.end:]
            self.pos = len(self.tokens)

        columns = _parse_columns(column_items)
        file1, file2 = _parse_sources(source_items)
        join_kind = JoinKind.parse(join_text)
        output = OutputTarget.from_clause(output_clause, self.default_output)

        return Query(
            columns=columns,
            file1=file1,
            file2=file2,
            join_kind=join_kind,
            strategy_name=strategy_name,
            output=output,
        )


def _parse_columns(items: List[str]) -> Tuple[str, ...]:
    columns = [item.strip() for item in items]
    if not any(columns):
        raise QueryParseError("column list cannot be empty")
    if columns == [WILDCARD]:
        return (WILDCARD,)
    for position, name in enumerate(columns, start=1):
        if not name:
            raise QueryParseError(f"empty column name at position {position}")
    return tuple(columns)


def _parse_sources(items: List[str]) -> Tuple[str, str]:
    sources = [item.strip() for item in items]
    if len(sources) != 2 or not all(sources):
        raise QueryParseError(
            f"exactly two sources required, got {len([s for s in sources if s])}",
            fragment=", ".join(sources),
        )
    return sources[0], sources[1]


def parse_command(
    command: str,
    *,
    default_strategy: str = DEFAULT_STRATEGY,
    default_output: str = DEFAULT_OUTPUT_FILE,
) -> Query:
    """Parse a join command into a :class:`Query`.

    Args:
        command: Raw command text
        default_strategy: Strategy used when the command names none
        default_output: File used when there is no ``>`` clause, and the file
            name appended to directory outputs

    Returns:
        Parsed query

    Raises:
        QueryParseError: If the command does not follow the grammar, names a
            wrong number of sources, has an empty column list or an unknown
            join type

    Example:
        >>> q = parse_command("select * from a.csv, b.csv hashjoin left in_memory >")
        >>> q.join_kind, q.output.is_stdout
        (<JoinKind.LEFT: 'left'>, True)
    """
    query = _CommandParser(command.strip(), default_strategy, default_output).parse()
    logger.debug(
        "Parsed command: columns=%s sources=%s join=%s strategy=%s output=%s",
        list(query.columns),
        list(query.sources),
        query.join_kind.value,
        query.strategy_name,
        query.output.describe(),
    )
    return query
