"""Dataset inspection commands for the mcflation CLI."""

from __future__ import annotations

from pathlib import Path

import typer

from mcflation.core.data.sources import CsvDataSource, DataSource
from mcflation.core.exceptions import SourceUnavailableError
from mcflation.core.models import CanonicalRow, SeriesMode, SeriesRole, SeriesSet
from mcflation.core.services.series import build_series
from mcflation.core.services.session import load_rows

from .constants import SOURCE_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import CLIOptions, emit_error, open_output

PRICE_COLUMNS = ["year", "available", "min_price", "max_price", "notes"]
SERIES_COLUMNS = ["year", "min", "max", "hover", "missing"]


def get_data_source(csv_path: Path | None = None) -> DataSource:
    """Factory hook for obtaining the dataset reader."""

    return CsvDataSource(configured=csv_path)


def register(app: typer.Typer) -> None:
    """Register the dataset commands on the provided application."""

    app.command("prices")(prices_command)
    app.command("series")(series_command)
    app.command("missing")(missing_command)


def _load(ctx: typer.Context) -> list[CanonicalRow]:
    source = get_data_source(CLIOptions.from_context(ctx).csv_path)
    try:
        return load_rows(source)
    except SourceUnavailableError as error:
        emit_error(error.message, error.error_code, details=error.details)
        raise typer.Exit(code=SOURCE_EXIT_CODE) from error


def _parse_mode(value: str) -> SeriesMode:
    try:
        return SeriesMode(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(mode.value for mode in SeriesMode)
        emit_error(f"Unsupported mode '{value}'. Available modes: {allowed}.", "INVALID_MODE")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc


def prices_command(ctx: typer.Context) -> None:
    """Print the normalized dataset."""

    rows = _load(ctx)
    with open_output(ctx) as (formatter, stream):
        formatter.render(
            [row.model_dump(include=set(PRICE_COLUMNS)) for row in rows],
            stream=stream,
            columns=PRICE_COLUMNS,
        )


def series_rows(series_set: SeriesSet) -> list[dict[str, object]]:
    """Flatten a series set into one row per axis year."""

    missing = set(series_set.missing_years)
    by_role = {role: series_set.get(role) for role in SeriesRole}
    rows: list[dict[str, object]] = []
    for index, year in enumerate(series_set.axis):
        row: dict[str, object] = {"year": year}
        for role in SeriesRole:
            series = by_role[role]
            row[role.value] = series.points[index].value if series is not None else None
        row["missing"] = year in missing
        rows.append(row)
    return rows


def series_command(
    ctx: typer.Context,
    mode: str = typer.Option(SeriesMode.GAP_PRESERVING.value, "--mode", help="gap_preserving or availability_filtered."),
    hover: bool = typer.Option(True, "--hover/--no-hover", help="Include the hover-target series."),
    fill_years: bool = typer.Option(False, "--fill-years", help="Add years with no row to the axis."),
) -> None:
    """Print the plot series, one row per axis year."""

    series_mode = _parse_mode(mode)
    rows = _load(ctx)
    series_set = build_series(rows, mode=series_mode, include_hover_proxy=hover, fill_years=fill_years)
    with open_output(ctx) as (formatter, stream):
        formatter.render(series_rows(series_set), stream=stream, columns=SERIES_COLUMNS)


def missing_command(
    ctx: typer.Context,
    mode: str = typer.Option(SeriesMode.GAP_PRESERVING.value, "--mode", help="gap_preserving or availability_filtered."),
    fill_years: bool = typer.Option(False, "--fill-years", help="Add years with no row to the axis."),
) -> None:
    """Print the years that get a missing-data marker."""

    series_mode = _parse_mode(mode)
    rows = _load(ctx)
    series_set = build_series(rows, mode=series_mode, include_hover_proxy=False, fill_years=fill_years)
    with open_output(ctx) as (formatter, stream):
        formatter.render([{"year": year} for year in series_set.missing_years], stream=stream, columns=["year"])
