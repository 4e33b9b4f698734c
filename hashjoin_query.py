"""CLI entrypoint for csv-hashjoin.

This file wires together:

- Settings loading (YAML config, environment)
- Logging setup
- Command parsing
- Strategy selection and execution

Example:
    hashjoin "select id, name, age from people.csv, ages.csv hashjoin left in_memory >"
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from hashjoin import __version__
from hashjoin.config import EngineSettings, load_settings
from hashjoin.exceptions import HashJoinError
from hashjoin.executor import describe_strategies, execute_query
from hashjoin.logging_config import LOG_FORMATS, parse_log_level, setup_logging
from hashjoin.query import Query, parse_command
from hashjoin.storage import ColumnIndex, full_column_list, read_headers
from hashjoin.strategies import resolve_strategy

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashjoin",
        description="Join two CSV files with a SELECT ... HASHJOIN command",
        epilog=(
            'Example: hashjoin "select * from a.csv, b.csv hashjoin inner in_memory >"'
        ),
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Join command, e.g. \"select id, name from a.csv, b.csv hashjoin left in_memory > out.csv\"",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML settings file. Can also set via HASHJOIN_CONFIG env var",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Parse the command and check strategy, sources and columns without joining",
    )
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="List known join strategies and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG level) logging",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress all log output except errors"
    )
    parser.add_argument(
        "--log-format",
        choices=list(LOG_FORMATS),
        default=None,
        help="Log format (default: human). Can also set via HASHJOIN_LOG_FORMAT env var",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"csv-hashjoin {__version__}",
        help="Show version and exit",
    )
    return parser


def configure_logging(args: argparse.Namespace, settings: EngineSettings) -> None:
    """Apply logging options; flags win over env vars, env vars over the config file."""
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = parse_log_level(
            os.environ.get("HASHJOIN_LOG_LEVEL") or settings.logging.level
        )
    format_type = (
        args.log_format
        or os.environ.get("HASHJOIN_LOG_FORMAT")
        or settings.logging.format
    )
    log_file = os.environ.get("HASHJOIN_LOG_FILE") or settings.logging.file
    setup_logging(
        level=level,
        format_type=format_type.lower(),
        log_file=Path(log_file) if log_file else None,
        use_colors=True,
    )


def resolve_projection(query: Query) -> List[str]:
    """Columns the query would output, checked against the source headers."""
    if query.is_wildcard:
        return full_column_list(query.file1, query.file2)
    index = ColumnIndex.build(read_headers(query.file1), read_headers(query.file2))
    index.validate(query.columns)
    return list(query.columns)


class QueryRunner:
    """Encapsulates CLI workflows (validation, execution)."""

    def __init__(self, settings: EngineSettings, args: argparse.Namespace) -> None:
        self.settings = settings
        self.args = args

    def execute(self) -> int:
        try:
            return self._run()
        except HashJoinError as exc:
            logger.debug("Command failed", exc_info=True)
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    def _parse(self) -> Query:
        return parse_command(
            self.args.command,
            default_strategy=self.settings.default_strategy,
            default_output=self.settings.default_output,
        )

    def _run(self) -> int:
        query = self._parse()
        if self.args.validate_only:
            return self._validate(query)
        execute_query(query)
        return 0

    def _validate(self, query: Query) -> int:
        strategy = resolve_strategy(query.strategy_name)
        columns = resolve_projection(query)
        print("Command is valid")
        print(f"  columns:  {', '.join(columns)}")
        print(f"  sources:  {query.file1}, {query.file2}")
        print(f"  join:     {query.join_kind.value}")
        print(f"  strategy: {strategy.name}")
        print(f"  output:   {query.output.describe()}")
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_strategies:
        print("Available join strategies:")
        for name, status in describe_strategies().items():
            print(f"  - {name}: {status}")
        return 0

    if not args.command:
        parser.error("a join command is required")

    try:
        settings = load_settings(args.config)
    except HashJoinError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    configure_logging(args, settings)
    return QueryRunner(settings, args).execute()


if __name__ == "__main__":
    raise SystemExit(main())
