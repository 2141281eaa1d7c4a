"""mcflation - historical McChicken prices as gap-aware chart series.

Library usage:

    >>> import mcflation
    >>> rows = mcflation.load_prices()
    >>> series_set = mcflation.build_series(rows)
    >>> missing = series_set.missing_years

Service usage:

    uvicorn "mcflation.web.app:app" --port 3000
"""

from pathlib import Path

from mcflation.core.data.sources import CsvDataSource, MemoryDataSource
from mcflation.core.exceptions import PriceChartError, SourceUnavailableError
from mcflation.core.models import CanonicalRow, ChartKind, SeriesMode, SeriesSet
from mcflation.core.services.normalizer import normalize
from mcflation.core.services.series import build_series
from mcflation.core.services.session import ChartSession, load_rows

__version__ = "0.1.0"


def load_prices(csv_path: str | Path | None = None) -> list[CanonicalRow]:
    """Load normalized, year-sorted rows from the CSV dataset.

    Args:
        csv_path: optional path tried before the packaged default

    Raises:
        SourceUnavailableError: when no candidate path can be read
    """
    return load_rows(CsvDataSource(configured=csv_path))


__all__ = [
    "CanonicalRow",
    "ChartKind",
    "ChartSession",
    "CsvDataSource",
    "MemoryDataSource",
    "PriceChartError",
    "SeriesMode",
    "SeriesSet",
    "SourceUnavailableError",
    "build_series",
    "load_prices",
    "normalize",
]
