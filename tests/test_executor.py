"""Tests for query execution and output routing."""

import io

import pytest

from hashjoin.exceptions import (
    OutputWriteError,
    SourceReadError,
    StrategyNotImplementedError,
    UnknownColumnError,
    UnknownStrategyError,
)
from hashjoin.executor import describe_strategies, execute_query
from hashjoin.query import parse_command


def _command(people_csv, ages_csv, tail, columns="*"):
    return f"select {columns} from {people_csv}, {ages_csv} hashjoin {tail}"


def test_stdout_target_writes_to_stream(people_csv, ages_csv):
    stream = io.StringIO()
    query = parse_command(_command(people_csv, ages_csv, "left in_memory >"))

    metrics = execute_query(query, stdout=stream)

    assert stream.getvalue() == "id,name,age\n1,Alice,\n2,Bob,30\n"
    assert metrics.rows_emitted == 2


def test_stdout_is_the_default_stream(people_csv, ages_csv, capsys):
    execute_query(parse_command(_command(people_csv, ages_csv, "inner in_memory >")))
    captured = capsys.readouterr()
    assert captured.out == "id,name,age\n2,Bob,30\n"
    assert "id,name,age" not in captured.err


def test_file_target(tmp_path, people_csv, ages_csv):
    out = tmp_path / "joined.csv"
    query = parse_command(_command(people_csv, ages_csv, f"full in_memory > {out}"))

    execute_query(query)

    assert out.read_text(encoding="utf-8") == "id,name,age\n1,Alice,\n2,Bob,30\n3,,40\n"


def test_directory_target_gets_result_csv(tmp_path, people_csv, ages_csv):
    query = parse_command(_command(people_csv, ages_csv, f"inner in_memory > {tmp_path}/reports/"))

    execute_query(query)

    assert (tmp_path / "reports" / "result.csv").read_text(encoding="utf-8") == "id,name,age\n2,Bob,30\n"


def test_existing_output_is_truncated(tmp_path, people_csv, ages_csv):
    out = tmp_path / "joined.csv"
    out.write_text("stale,data\n" * 10, encoding="utf-8")

    execute_query(parse_command(_command(people_csv, ages_csv, f"inner in_memory > {out}")))

    assert out.read_text(encoding="utf-8") == "id,name,age\n2,Bob,30\n"


def test_failed_run_leaves_no_output(tmp_path, people_csv, ages_csv):
    out = tmp_path / "joined.csv"
    query = parse_command(_command(people_csv, ages_csv, f"inner in_memory > {out}", columns="id, salary"))

    with pytest.raises(UnknownColumnError, match="unknown column: 'salary'"):
        execute_query(query)

    assert list(tmp_path.glob("*joined*")) == []


def test_failed_run_keeps_previous_output(tmp_path, people_csv):
    out = tmp_path / "joined.csv"
    out.write_text("previous\n", encoding="utf-8")
    query = parse_command(f"select * from {people_csv}, {tmp_path}/nope.csv hashjoin inner in_memory > {out}")

    with pytest.raises(SourceReadError):
        execute_query(query)

    assert out.read_text(encoding="utf-8") == "previous\n"
    assert not (tmp_path / ".joined.csv.tmp").exists()


def test_failed_stdout_run_writes_nothing(people_csv, ages_csv):
    stream = io.StringIO()
    query = parse_command(_command(people_csv, ages_csv, "inner in_memory >", columns="bogus"))

    with pytest.raises(UnknownColumnError):
        execute_query(query, stdout=stream)

    assert stream.getvalue() == ""


def test_default_strategy_fails(people_csv, ages_csv):
    query = parse_command(_command(people_csv, ages_csv, "inner >", columns="id"))
    with pytest.raises(StrategyNotImplementedError):
        execute_query(query, stdout=io.StringIO())


def test_unknown_strategy(people_csv, ages_csv):
    query = parse_command(_command(people_csv, ages_csv, "inner hopscotch >"))
    with pytest.raises(UnknownStrategyError):
        execute_query(query, stdout=io.StringIO())


def test_placeholder_strategy_fails_before_reading_sources(tmp_path):
    query = parse_command(f"select * from {tmp_path}/a.csv, {tmp_path}/b.csv hashjoin inner merge_join >")
    with pytest.raises(StrategyNotImplementedError):
        execute_query(query, stdout=io.StringIO())


def test_unwritable_output(tmp_path, people_csv, ages_csv):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    query = parse_command(_command(people_csv, ages_csv, f"inner in_memory > {blocker}/out.csv"))

    with pytest.raises(OutputWriteError) as excinfo:
        execute_query(query)

    assert excinfo.value.error_code == "OUT001"


def test_metrics_hook(people_csv, ages_csv):
    seen = []
    execute_query(
        parse_command(_command(people_csv, ages_csv, "right in_memory >")),
        stdout=io.StringIO(),
        on_metrics=seen.append,
    )
    assert [m.rows_emitted for m in seen] == [2]


def test_describe_strategies():
    assert "in_memory" in describe_strategies()
