"""Series construction: canonical rows to gap-aware plot series over a year axis."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from decimal import Decimal

from loguru import logger

from mcflation.core.models.records import CanonicalRow
from mcflation.core.models.series import PlotPoint, Series, SeriesMode, SeriesRole, SeriesSet
from mcflation.core.services.formatting import summarize_sources

MIN_LABEL = "Min price"
MAX_LABEL = "Max price"
HOVER_LABEL = "Hover targets"

PriceGetter = Callable[[CanonicalRow], Decimal | None]


def index_by_year(rows: Iterable[CanonicalRow]) -> tuple[dict[int, CanonicalRow], tuple[int, ...]]:
    """Map rows by year. Later rows overwrite earlier ones for the same year.

    Returns the mapping and the years that occurred more than once.
    """

    by_year: dict[int, CanonicalRow] = {}
    duplicates: set[int] = set()
    for row in rows:
        if row.year is None:
            continue
        if row.year in by_year:
            duplicates.add(row.year)
        by_year[row.year] = row
    return by_year, tuple(sorted(duplicates))


def year_axis(
    rows: Iterable[CanonicalRow],
    *,
    mode: SeriesMode = SeriesMode.GAP_PRESERVING,
    fill_years: bool = False,
) -> tuple[int, ...]:
    """Sorted distinct years, optionally dropping unavailable rows or filling holes."""

    by_year, _ = index_by_year(rows)
    return _axis_from_index(by_year, mode=mode, fill_years=fill_years)


def _axis_from_index(
    by_year: Mapping[int, CanonicalRow],
    *,
    mode: SeriesMode,
    fill_years: bool,
) -> tuple[int, ...]:
    years = sorted(
        year
        for year, row in by_year.items()
        if mode is SeriesMode.GAP_PRESERVING or row.available is not False
    )
    if fill_years and years:
        return tuple(range(years[0], years[-1] + 1))
    return tuple(years)


def is_missing(row: CanonicalRow | None) -> bool:
    """True when a year has no usable price pair."""

    return row is None or row.available is False or row.min_price is None or row.max_price is None


def missing_years(by_year: Mapping[int, CanonicalRow], axis: Sequence[int]) -> tuple[int, ...]:
    return tuple(year for year in axis if is_missing(by_year.get(year)))


def _point(year: int, row: CanonicalRow | None, value: Decimal | None) -> PlotPoint:
    if row is None:
        return PlotPoint(year=year, value=value, source_summary=summarize_sources(None))
    return PlotPoint(
        year=year,
        value=value,
        min_price=row.min_price,
        max_price=row.max_price,
        available=row.available,
        notes=row.notes,
        source_summary=summarize_sources(row),
    )


def price_series(
    label: str,
    role: SeriesRole,
    axis: Sequence[int],
    by_year: Mapping[int, CanonicalRow],
    price: PriceGetter,
) -> Series:
    """One point per axis year; gaps where the row is absent, unavailable or unpriced."""

    points = []
    for year in axis:
        row = by_year.get(year)
        value = None if row is None or row.available is False else price(row)
        points.append(_point(year, row, value))
    return Series(label=label, role=role, points=tuple(points))


def hover_series(axis: Sequence[int], by_year: Mapping[int, CanonicalRow]) -> Series:
    """Invisible hit-test targets with a numeric value at every axis year."""

    points = []
    for year in axis:
        row = by_year.get(year)
        if row is None or row.available is False:
            value = Decimal(0)
        else:
            value = _first_present(row.min_price, row.max_price, Decimal(0))
        points.append(_point(year, row, value))
    return Series(label=HOVER_LABEL, role=SeriesRole.HOVER, points=tuple(points))


def _first_present(*values: Decimal | None) -> Decimal:
    for value in values:
        if value is not None:
            return value
    return Decimal(0)


def build_series(
    rows: Iterable[CanonicalRow],
    *,
    mode: SeriesMode = SeriesMode.GAP_PRESERVING,
    include_hover_proxy: bool = True,
    fill_years: bool = False,
) -> SeriesSet:
    """Build the min/max (and optional hover proxy) series for ``rows``.

    All series share the same axis so equal indices refer to the same year.
    """

    by_year, duplicates = index_by_year(rows)
    if duplicates:
        logger.bind(duplicate_years=list(duplicates)).warning(
            f"Dataset contains duplicate years {list(duplicates)}; the last row for each year is used"
        )

    axis = _axis_from_index(by_year, mode=mode, fill_years=fill_years)
    series: list[Series] = []
    if include_hover_proxy:
        series.append(hover_series(axis, by_year))
    series.append(price_series(MIN_LABEL, SeriesRole.MIN, axis, by_year, lambda row: row.min_price))
    series.append(price_series(MAX_LABEL, SeriesRole.MAX, axis, by_year, lambda row: row.max_price))

    inverted = [year for year in axis if year in by_year and by_year[year].has_inverted_range]
    if inverted:
        logger.bind(inverted_years=inverted).info("Rows with min price above max price are drawn as-is")

    return SeriesSet(
        axis=axis,
        series=tuple(series),
        missing_years=missing_years(by_year, axis),
        mode=mode,
        duplicate_years=duplicates,
    )


__all__ = [
    "HOVER_LABEL",
    "MAX_LABEL",
    "MIN_LABEL",
    "build_series",
    "hover_series",
    "index_by_year",
    "is_missing",
    "missing_years",
    "price_series",
    "year_axis",
]
