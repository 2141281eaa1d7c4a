"""Data sources supplying raw price rows."""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import pandas as pd
from loguru import logger

from mcflation.core.exceptions import SourceUnavailableError
from mcflation.core.models.records import RawRecord
from mcflation.core.monitoring.metrics import get_metrics_collector

DATA_FILENAME = "mcchicken_prices.csv"
DEFAULT_DATA_PATH = Path(__file__).resolve().parents[2] / "data" / DATA_FILENAME


@runtime_checkable
class DataSource(Protocol):
    """Anything returning the full dataset in one read."""

    name: str

    def read(self) -> list[RawRecord]: ...


def candidate_paths(configured: str | Path | None = None) -> list[Path]:
    """Paths tried in order: configured, packaged default, ``./data`` under the cwd."""

    candidates = [Path(configured)] if configured else []
    candidates.extend([DEFAULT_DATA_PATH, Path.cwd() / "data" / DATA_FILENAME])
    unique: list[Path] = []
    for path in candidates:
        if path not in unique:
            unique.append(path)
    return unique


def read_csv_records(path: Path) -> list[RawRecord]:
    """Parse a CSV with a header row; every cell is trimmed text, blank lines skipped."""

    frame = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        skipinitialspace=True,
        encoding="utf-8",
    )
    frame.columns = [str(column).strip() for column in frame.columns]
    frame = frame.apply(lambda column: column.str.strip())
    # A line of only delimiters survives skip_blank_lines
    frame = frame[(frame != "").any(axis=1)]
    return frame.to_dict(orient="records")


class CsvDataSource:
    """Reads the first CSV that can be parsed from a list of candidate paths."""

    name = "csv"

    def __init__(self, paths: Sequence[str | Path] | None = None, *, configured: str | Path | None = None) -> None:
        self.paths = [Path(p) for p in paths] if paths else candidate_paths(configured)
        self.used_path: Path | None = None

    def read(self) -> list[RawRecord]:
        collector = get_metrics_collector()
        started = time.perf_counter()
        for candidate in self.paths:
            try:
                records = read_csv_records(candidate)
            except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
                logger.bind(source=self.name, path=str(candidate)).warning(
                    f"Unable to read CSV at {candidate}: {exc}"
                )
                continue

            self.used_path = candidate
            if candidate != DEFAULT_DATA_PATH:
                logger.bind(source=self.name).info(f"Loaded CSV data from {candidate}")
            collector.observe_load(self.name, time.perf_counter() - started, success=True)
            return records

        collector.observe_load(self.name, time.perf_counter() - started, success=False)
        joined = ", ".join(str(p) for p in self.paths)
        raise SourceUnavailableError(
            f"Unable to read CSV from any known path: {joined}",
            candidates=[str(p) for p in self.paths],
        )


class MemoryDataSource:
    """In-memory rows, for tests and embedding."""

    name = "memory"

    def __init__(self, rows: Iterable[Mapping[str, str | None]]) -> None:
        self._rows = [dict(row) for row in rows]

    def read(self) -> list[RawRecord]:
        get_metrics_collector().observe_load(self.name, 0.0, success=True)
        return [dict(row) for row in self._rows]


__all__ = [
    "CsvDataSource",
    "DEFAULT_DATA_PATH",
    "DataSource",
    "MemoryDataSource",
    "candidate_paths",
    "read_csv_records",
]
