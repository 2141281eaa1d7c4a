"""Pipeline services: normalization, series building, interaction and chart description."""

from mcflation.core.services.chart import (
    ChartRenderer,
    LinearScale,
    MarkerGlyph,
    MissingMarkerLayer,
    RenderHooks,
    build_chart_config,
)
from mcflation.core.services.formatting import linkify, render_tooltip, summarize_sources
from mcflation.core.services.interaction import InteractionController, transition
from mcflation.core.services.normalizer import drop_yearless, normalize, normalize_record
from mcflation.core.services.series import build_series, year_axis
from mcflation.core.services.session import ChartSession, ErrorState, load_rows

__all__ = [
    "ChartRenderer",
    "ChartSession",
    "ErrorState",
    "InteractionController",
    "LinearScale",
    "MarkerGlyph",
    "MissingMarkerLayer",
    "RenderHooks",
    "build_chart_config",
    "build_series",
    "drop_yearless",
    "linkify",
    "load_rows",
    "normalize",
    "normalize_record",
    "render_tooltip",
    "summarize_sources",
    "transition",
    "year_axis",
]
