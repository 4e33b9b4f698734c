"""Command language: query model and parser."""

from .model import WILDCARD, JoinKind, OutputTarget, Query
from .parser import parse_command, tokenize

__all__ = [
    "JoinKind",
    "OutputTarget",
    "Query",
    "WILDCARD",
    "parse_command",
    "tokenize",
]
