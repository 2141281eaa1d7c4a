from __future__ import annotations

from pathlib import Path

import pytest

from mcflation.core.data.sources import (
    DEFAULT_DATA_PATH,
    CsvDataSource,
    MemoryDataSource,
    candidate_paths,
    read_csv_records,
)
from mcflation.core.exceptions import SourceUnavailableError
from mcflation.core.services.session import load_rows

HEADER = "year,available,min_price,max_price,notes,source_history\n"


def _write_csv(path: Path, body: str, header: str = HEADER) -> Path:
    path.write_text(header + body, encoding="utf-8")
    return path


def test_read_csv_trims_cells_and_skips_blank_lines(tmp_path: Path) -> None:
    csv_path = _write_csv(
        tmp_path / "prices.csv",
        ' 2020 , yes , 1.00 ,1.29, "Menu, board",H\n\n,,,,,\n2022,no,,,,\n',
    )

    records = read_csv_records(csv_path)

    assert records == [
        {
            "year": "2020",
            "available": "yes",
            "min_price": "1.00",
            "max_price": "1.29",
            "notes": "Menu, board",
            "source_history": "H",
        },
        {"year": "2022", "available": "no", "min_price": "", "max_price": "", "notes": "", "source_history": ""},
    ]


def test_read_csv_strips_header_whitespace(tmp_path: Path) -> None:
    csv_path = _write_csv(tmp_path / "prices.csv", "2001,yes,1,2\n", header=" Year , Available ,Minimum Price, Maximum Price\n")

    rows = load_rows(CsvDataSource(paths=[csv_path]))

    assert rows[0].year == 2001
    assert rows[0].available is True
    assert rows[0].max_price is not None


def test_candidate_paths_order(tmp_path: Path) -> None:
    configured = tmp_path / "custom.csv"

    paths = candidate_paths(configured)

    assert paths[0] == configured
    assert paths[1] == DEFAULT_DATA_PATH
    assert paths[2] == Path.cwd() / "data" / "mcchicken_prices.csv"


def test_candidate_paths_deduplicate_default() -> None:
    assert candidate_paths(DEFAULT_DATA_PATH).count(DEFAULT_DATA_PATH) == 1


def test_csv_source_falls_back_to_next_candidate(tmp_path: Path) -> None:
    good = _write_csv(tmp_path / "good.csv", "2020,yes,1.00,1.29,,\n")
    source = CsvDataSource(paths=[tmp_path / "missing.csv", tmp_path, good])

    records = source.read()

    assert source.used_path == good
    assert records[0]["year"] == "2020"


def test_csv_source_raises_when_no_candidate_readable(tmp_path: Path, metrics_collector) -> None:
    missing = [tmp_path / "a.csv", tmp_path / "b.csv"]
    source = CsvDataSource(paths=missing)

    with pytest.raises(SourceUnavailableError) as exc_info:
        source.read()

    assert exc_info.value.candidates == [str(path) for path in missing]
    assert source.used_path is None
    failures = metrics_collector.registry.get_sample_value(
        "mcflation_dataset_load_failures_total",
        {"source": "csv"},
    )
    assert failures == 1.0


def test_packaged_dataset_loads() -> None:
    source = CsvDataSource()

    rows = load_rows(source)

    assert source.used_path == DEFAULT_DATA_PATH
    assert rows
    assert [row.year for row in rows] == sorted(row.year for row in rows)


def test_memory_source_returns_copies() -> None:
    source = MemoryDataSource([{"year": "2020"}])

    first = source.read()
    first[0]["year"] = "1999"

    assert source.read() == [{"year": "2020"}]
