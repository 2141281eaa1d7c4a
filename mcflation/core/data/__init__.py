"""Data source module."""

from mcflation.core.data.sources import (
    DEFAULT_DATA_PATH,
    CsvDataSource,
    DataSource,
    MemoryDataSource,
    candidate_paths,
)

__all__ = [
    "CsvDataSource",
    "DEFAULT_DATA_PATH",
    "DataSource",
    "MemoryDataSource",
    "candidate_paths",
]
