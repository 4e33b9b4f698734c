"""Join strategy registry utilities."""

from __future__ import annotations

from typing import Callable, Dict, Optional, TYPE_CHECKING, Type

from hashjoin.exceptions import StrategyNotImplementedError, UnknownStrategyError

if TYPE_CHECKING:
    from hashjoin.observability import MetricsHook

    from .base import JoinStrategy

STRATEGY_REGISTRY: Dict[str, Type["JoinStrategy"]] = {}

# Reserved names with no implementation behind them yet.
PLACEHOLDER_STRATEGIES: Dict[str, str] = {
    "merge_join": "sort-merge join",
    "disk_based": "disk-spilling hash join",
}


def _normalize(name: str) -> str:
    return name.strip().lower()


def register_strategy(
    *names: str,
) -> Callable[[Type["JoinStrategy"]], Type["JoinStrategy"]]:
    """Register a strategy class under one or more case-insensitive names."""

    def decorator(cls: Type["JoinStrategy"]) -> Type["JoinStrategy"]:
        for name in names:
            STRATEGY_REGISTRY[_normalize(name)] = cls
        return cls

    return decorator


def get_strategy_class(name: str) -> Optional[Type["JoinStrategy"]]:
    """Get the strategy class registered for ``name``."""

    return STRATEGY_REGISTRY.get(_normalize(name))


def list_strategies() -> Dict[str, str]:
    """Map every known strategy name to a short status line."""

    listing = {name: cls.__name__ for name, cls in STRATEGY_REGISTRY.items()}
    for name, description in PLACEHOLDER_STRATEGIES.items():
        listing[name] = f"not implemented ({description})"
    return dict(sorted(listing.items()))


def resolve_strategy(name: str, on_metrics: Optional["MetricsHook"] = None) -> "JoinStrategy":
    """Instantiate the strategy registered for ``name``.

    Raises:
        StrategyNotImplementedError: For reserved placeholder names
        UnknownStrategyError: For names nothing is registered under
    """
    key = _normalize(name)
    if key in PLACEHOLDER_STRATEGIES:
        raise StrategyNotImplementedError(
            f"strategy not implemented: {name}", strategy=name
        )
    cls = get_strategy_class(key)
    if cls is None:
        raise UnknownStrategyError(name, available=list(STRATEGY_REGISTRY) + list(PLACEHOLDER_STRATEGIES))
    return cls(on_metrics=on_metrics)
