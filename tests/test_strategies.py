"""Tests for the strategy registry and the non-default strategies."""

import io

import pytest

import hashjoin.strategies.registry as registry
from hashjoin.exceptions import (
    StrategyError,
    StrategyNotImplementedError,
    UnknownStrategyError,
)
from hashjoin.query import JoinKind, OutputTarget, Query
from hashjoin.strategies import (
    STRATEGY_REGISTRY,
    InMemoryJoin,
    JoinStrategy,
    OnlySmallestJoin,
    get_strategy_class,
    list_strategies,
    register_strategy,
    resolve_strategy,
)


def _query(kind=JoinKind.INNER, columns=("id",), strategy="only_smallest"):
    return Query(
        columns=columns,
        file1="missing_a.csv",
        file2="missing_b.csv",
        join_kind=kind,
        strategy_name=strategy,
        output=OutputTarget.stdout(),
    )


def test_builtin_strategies_are_registered():
    assert get_strategy_class("in_memory") is InMemoryJoin
    assert get_strategy_class("only_smallest") is OnlySmallestJoin
    assert get_strategy_class("stream_processing") is OnlySmallestJoin


@pytest.mark.parametrize("name", ["in_memory", "IN_MEMORY", "In_Memory", " in_memory "])
def test_resolution_is_case_insensitive(name):
    assert isinstance(resolve_strategy(name), InMemoryJoin)


def test_resolve_passes_metrics_hook():
    hook = lambda metrics: None  # noqa: E731
    assert resolve_strategy("in_memory", on_metrics=hook).on_metrics is hook


@pytest.mark.parametrize("name", ["merge_join", "DISK_BASED"])
def test_placeholder_strategies_fail(name):
    with pytest.raises(StrategyNotImplementedError, match=f"strategy not implemented: {name}"):
        resolve_strategy(name)


def test_unknown_strategy_lists_alternatives():
    with pytest.raises(UnknownStrategyError, match="unknown strategy: nested_loop") as excinfo:
        resolve_strategy("nested_loop")
    assert "in_memory" in excinfo.value.details["available"]
    assert "merge_join" in excinfo.value.details["available"]


def test_list_strategies_reports_status():
    listing = list_strategies()

    assert list(listing) == sorted(listing)
    assert listing["in_memory"] == "InMemoryJoin"
    assert listing["merge_join"].startswith("not implemented")
    assert listing["disk_based"].startswith("not implemented")


def test_only_smallest_rejects_outer_joins_first():
    with pytest.raises(StrategyError, match="supports only inner joins") as excinfo:
        OnlySmallestJoin().execute_to_writer(_query(JoinKind.LEFT, ("*",)), io.StringIO())
    assert not isinstance(excinfo.value, StrategyNotImplementedError)


def test_only_smallest_rejects_wildcard():
    with pytest.raises(StrategyError, match="does not support SELECT"):
        OnlySmallestJoin().execute_to_writer(_query(columns=("*",)), io.StringIO())


def test_only_smallest_is_not_implemented():
    writer = io.StringIO()
    with pytest.raises(StrategyNotImplementedError, match="use 'in_memory'") as excinfo:
        OnlySmallestJoin().execute_to_writer(_query(), writer)
    assert excinfo.value.error_code == "STRAT003"
    assert writer.getvalue() == ""


def test_stream_processing_alias_behaves_like_only_smallest():
    strategy = resolve_strategy("stream_processing")
    with pytest.raises(StrategyNotImplementedError):
        strategy.execute_to_writer(_query(strategy="stream_processing"), io.StringIO())


def test_register_custom_strategy():
    @register_strategy("Constant")
    class ConstantJoin(JoinStrategy):
        name = "constant"

        def execute_to_writer(self, query, writer):
            writer.write("x\n")

    try:
        assert isinstance(resolve_strategy("CONSTANT"), ConstantJoin)
        assert list_strategies()["constant"] == "ConstantJoin"
    finally:
        STRATEGY_REGISTRY.pop("constant", None)

    assert get_strategy_class("constant") is None


def test_resolution_goes_through_registry_lookup(monkeypatch):
    looked_up = []
    real_lookup = get_strategy_class

    def _recording(name):
        looked_up.append(name)
        return real_lookup(name)

    monkeypatch.setattr(registry, "get_strategy_class", _recording)
    assert isinstance(registry.resolve_strategy("In_Memory"), InMemoryJoin)
    assert looked_up == ["in_memory"]
