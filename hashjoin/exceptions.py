"""Custom exception classes for csv-hashjoin.

This module provides specific exception types for better error handling and debugging.
"""

from typing import Any, Dict, Iterable, Optional


class HashJoinError(Exception):
    """Base exception for all csv-hashjoin errors."""

    error_code: str = "ERR000"  # Override in subclasses

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        """
        Initialize csv-hashjoin exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context
            error_code: Optional error code override
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        """Return string representation with error code and details."""
        parts = [f"[{self.error_code}] {self.message}"]
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


class QueryParseError(HashJoinError):
    """Raised when a command string cannot be turned into a query.

    Examples:
        - Command does not follow the SELECT ... FROM ... HASHJOIN grammar
        - Number of sources is not exactly two
        - Empty column list
        - Unknown join type keyword
    """

    error_code = "PARSE001"

    def __init__(self, message: str, fragment: Optional[str] = None):
        """
        Initialize query parse error.

        Args:
            message: Description of the parse failure
            fragment: Part of the command that could not be parsed
        """
        details = {}
        if fragment is not None:
            details['fragment'] = fragment
        super().__init__(message, details)


class ConfigValidationError(HashJoinError):
    """Raised when configuration validation fails.

    Examples:
        - Config file missing or not valid YAML
        - Missing 'hashjoin' section
        - Type mismatches in configuration values
    """

    error_code = "CFG001"

    def __init__(self, message: str, config_path: Optional[str] = None, key: Optional[str] = None):
        """
        Initialize configuration validation error.

        Args:
            message: Description of validation failure
            config_path: Path to config file that failed validation
            key: Specific configuration key that caused the error
        """
        details = {}
        if config_path:
            details['config_path'] = config_path
        if key:
            details['config_key'] = key
        super().__init__(message, details)


class StrategyError(HashJoinError):
    """Raised when a join strategy refuses to run a query.

    Examples:
        - Strategy only supports inner joins
        - Strategy does not support wildcard selection
    """

    error_code = "STRAT001"

    def __init__(self, message: str, strategy: Optional[str] = None):
        """
        Initialize strategy error.

        Args:
            message: Description of the failure
            strategy: Strategy name as written in the command
        """
        details = {}
        if strategy:
            details['strategy'] = strategy
        super().__init__(message, details)


class UnknownStrategyError(StrategyError):
    """Raised when a strategy name is not registered."""

    error_code = "STRAT002"

    def __init__(self, strategy: str, available: Optional[Iterable[str]] = None):
        super().__init__(f"unknown strategy: {strategy}", strategy=strategy)
        if available is not None:
            self.details['available'] = ", ".join(sorted(available))


class StrategyNotImplementedError(StrategyError):
    """Raised for strategy names that are reserved but have no implementation.

    Examples:
        - merge_join
        - disk_based
        - only_smallest (after validating the query)
    """

    error_code = "STRAT003"


class UnknownColumnError(HashJoinError):
    """Raised when a projected column exists in neither source."""

    error_code = "COL001"

    def __init__(self, column: str, available: Optional[Iterable[str]] = None):
        """
        Initialize unknown column error.

        Args:
            column: Column name that could not be resolved
            available: Column names that were available for projection
        """
        details = {}
        if available is not None:
            details['available'] = ", ".join(available)
        super().__init__(f"unknown column: '{column}'", details)
        self.column = column


class SourceReadError(HashJoinError):
    """Raised when a CSV source cannot be opened or parsed.

    Examples:
        - File not found or permission denied
        - Empty file without a header row
        - Row with more fields than the header
    """

    error_code = "SRC001"

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """
        Initialize source read error.

        Args:
            message: Description of the read failure
            source: Path of the offending source
            original_error: Original exception that caused this error
        """
        details = {}
        if source:
            details['source'] = source
        if original_error:
            details['original_error'] = str(original_error)
            details['error_type'] = type(original_error).__name__

        super().__init__(message, details)
        self.source = source
        self.original_error = original_error


class OutputWriteError(HashJoinError):
    """Raised when the result sink cannot be created or written."""

    error_code = "OUT001"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if path:
            details['path'] = path
        if original_error:
            details['original_error'] = str(original_error)
            details['error_type'] = type(original_error).__name__

        super().__init__(message, details)
        self.original_error = original_error
