"""Join strategies and their name registry.

Importing this package registers the built-in strategies.
"""

from .base import JoinStrategy
from .in_memory import InMemoryJoin
from .registry import (
    PLACEHOLDER_STRATEGIES,
    STRATEGY_REGISTRY,
    get_strategy_class,
    list_strategies,
    register_strategy,
    resolve_strategy,
)
from .smallest import OnlySmallestJoin

__all__ = [
    "InMemoryJoin",
    "JoinStrategy",
    "OnlySmallestJoin",
    "PLACEHOLDER_STRATEGIES",
    "STRATEGY_REGISTRY",
    "get_strategy_class",
    "list_strategies",
    "register_strategy",
    "resolve_strategy",
]
