from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from mcflation.cli import data as data_module
from mcflation.cli.main import create_app
from mcflation.core.data.sources import CsvDataSource, MemoryDataSource


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def memory_source(monkeypatch: pytest.MonkeyPatch, raw_records) -> MemoryDataSource:
    source = MemoryDataSource(raw_records)
    monkeypatch.setattr(data_module, "get_data_source", lambda csv_path=None: source)
    return source


def _jsonl(text: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


def test_prices_table_output(runner: CliRunner, memory_source: MemoryDataSource) -> None:
    result = runner.invoke(create_app(), ["--no-color", "prices"])

    assert result.exit_code == 0, result.output
    assert "min_price" in result.output
    assert "2021" in result.output
    assert "1.29" in result.output


def test_prices_jsonl_output(runner: CliRunner, memory_source: MemoryDataSource) -> None:
    result = runner.invoke(create_app(), ["--format", "jsonl", "prices"])

    assert result.exit_code == 0, result.output
    rows = _jsonl(result.stdout)
    assert [row["year"] for row in rows] == [2020, 2021, 2022]
    assert rows[0]["max_price"] == 1.29
    assert rows[2]["min_price"] is None


def test_series_jsonl_output(runner: CliRunner, memory_source: MemoryDataSource) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "series", "--fill-years"])

    assert result.exit_code == 0, result.output
    rows = _jsonl(result.stdout)
    assert [row["year"] for row in rows] == [2020, 2021, 2022]
    assert rows[0]["min"] == 1.0
    assert rows[2]["min"] is None
    assert rows[2]["hover"] == 0.0
    assert [row["missing"] for row in rows] == [False, True, True]


def test_series_without_hover(runner: CliRunner, memory_source: MemoryDataSource) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "series", "--no-hover"])

    assert result.exit_code == 0, result.output
    assert all(row["hover"] is None for row in _jsonl(result.stdout))


def test_missing_filtered_mode(runner: CliRunner, memory_source: MemoryDataSource) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "missing", "--mode", "availability_filtered"])

    assert result.exit_code == 0, result.output
    assert _jsonl(result.stdout) == [{"year": 2021}]


def test_invalid_mode_exits_with_validation_code(runner: CliRunner, memory_source: MemoryDataSource) -> None:
    result = runner.invoke(create_app(), ["series", "--mode", "sideways"])

    assert result.exit_code == 2
    assert "INVALID_MODE" in result.output


def test_invalid_format_rejected(runner: CliRunner, memory_source: MemoryDataSource) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "prices"])

    assert result.exit_code != 0


def test_unreadable_dataset_exits_with_source_code(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    monkeypatch.setattr(
        data_module,
        "get_data_source",
        lambda csv_path=None: CsvDataSource(paths=[tmp_path / "missing.csv"]),
    )

    result = runner.invoke(create_app(), ["prices"])

    assert result.exit_code == 3
    assert "SOURCE_UNAVAILABLE" in result.output


def test_csv_option_reads_given_file(runner: CliRunner, tmp_path) -> None:
    csv_path = tmp_path / "prices.csv"
    csv_path.write_text("Year,Availability,Price_Low_USD,Price_High_USD\n1999,yes,0.99,1.09\n", encoding="utf-8")

    result = runner.invoke(create_app(), ["--csv", str(csv_path), "-f", "jsonl", "prices"])

    assert result.exit_code == 0, result.output
    assert _jsonl(result.stdout)[0] == {
        "year": 1999,
        "available": True,
        "min_price": 0.99,
        "max_price": 1.09,
        "notes": None,
    }


def test_output_file(runner: CliRunner, memory_source: MemoryDataSource, tmp_path) -> None:
    target = tmp_path / "out.jsonl"

    result = runner.invoke(create_app(), ["-f", "jsonl", "-o", str(target), "missing"])

    assert result.exit_code == 0, result.output
    assert _jsonl(target.read_text(encoding="utf-8")) == [{"year": 2021}, {"year": 2022}]


def test_serve_command_applies_overrides(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    from mcflation.web import main as web_main

    served = []
    monkeypatch.setattr(web_main, "serve", lambda config: served.append(config))
    monkeypatch.delenv("MCFLATION_CSV_PATH", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    result = runner.invoke(create_app(), ["serve", "--port", "8124", "--host", "127.0.0.1"])

    assert result.exit_code == 0, result.output
    (config,) = served
    assert config.server.port == 8124
    assert config.server.host == "127.0.0.1"
    assert config.server.reload is False
