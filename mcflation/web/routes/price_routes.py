"""
Price data and chart description routes
"""

from fastapi import APIRouter, Query, Request
from starlette.concurrency import run_in_threadpool

from mcflation.core.config import AppConfig
from mcflation.core.data.sources import DataSource
from mcflation.core.models import ChartKind, SeriesMode
from mcflation.core.services.chart import build_chart_config
from mcflation.core.services.series import build_series
from mcflation.core.services.session import load_rows
from mcflation.web.models import ChartResponse, ErrorResponse, PricesResponse

router = APIRouter()

_ERROR_RESPONSES = {500: {"model": ErrorResponse, "description": "The CSV dataset could not be read"}}


@router.get("/prices", response_model=PricesResponse, responses=_ERROR_RESPONSES)
async def get_prices(request: Request) -> PricesResponse:
    """
    Return every normalized row with a year, sorted ascending.
    """
    source: DataSource = request.app.state.data_source
    rows = await run_in_threadpool(load_rows, source)
    return PricesResponse(data=rows)


@router.get("/chart", response_model=ChartResponse, responses=_ERROR_RESPONSES)
async def get_chart(
    request: Request,
    mode: SeriesMode | None = Query(None, description="gap_preserving or availability_filtered"),
    kind: ChartKind | None = Query(None, description="line or bar_range"),
    hover: bool | None = Query(None, description="Include the invisible hover-target series"),
    fill_years: bool | None = Query(None, description="Add years with no row to the axis"),
) -> ChartResponse:
    """
    Build the series set and chart configuration server side.

    Unset parameters fall back to the ``[data]`` configuration section.
    """
    config: AppConfig = request.app.state.config
    source: DataSource = request.app.state.data_source

    resolved_mode = mode or SeriesMode(config.data.series_mode)
    resolved_kind = kind or ChartKind(config.data.chart_kind)
    include_hover = config.data.include_hover_proxy if hover is None else hover
    resolved_fill = config.data.fill_years if fill_years is None else fill_years

    rows = await run_in_threadpool(load_rows, source)
    series_set = build_series(
        rows,
        mode=resolved_mode,
        include_hover_proxy=include_hover and resolved_kind is ChartKind.LINE,
        fill_years=resolved_fill,
    )
    return ChartResponse(
        mode=resolved_mode,
        kind=resolved_kind,
        axis=list(series_set.axis),
        missing_years=list(series_set.missing_years),
        duplicate_years=list(series_set.duplicate_years),
        config=build_chart_config(series_set, resolved_kind),
    )
