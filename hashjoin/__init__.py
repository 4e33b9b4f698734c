"""Hash-join query engine for pairs of CSV files.

Layer Structure:
    hashjoin.query       - command model and parser
    hashjoin.storage     - CSV table loading and column index
    hashjoin.strategies  - join algorithms and their registry
    hashjoin.executor    - strategy selection and output routing
    hashjoin.config      - YAML settings
"""

__version__ = "1.0.0"

from hashjoin.config import EngineSettings, load_settings
from hashjoin.exceptions import (
    ConfigValidationError,
    HashJoinError,
    OutputWriteError,
    QueryParseError,
    SourceReadError,
    StrategyError,
    StrategyNotImplementedError,
    UnknownColumnError,
    UnknownStrategyError,
)
from hashjoin.executor import describe_strategies, execute_query
from hashjoin.observability import JoinMetrics
from hashjoin.query import JoinKind, OutputTarget, Query, parse_command

__all__ = [
    "ConfigValidationError",
    "EngineSettings",
    "HashJoinError",
    "JoinKind",
    "JoinMetrics",
    "OutputTarget",
    "OutputWriteError",
    "Query",
    "QueryParseError",
    "SourceReadError",
    "StrategyError",
    "StrategyNotImplementedError",
    "UnknownColumnError",
    "UnknownStrategyError",
    "describe_strategies",
    "execute_query",
    "load_settings",
    "parse_command",
]
