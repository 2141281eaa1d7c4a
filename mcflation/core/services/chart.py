"""Declarative chart description and the render-hook contract.

The renderer itself is external. It consumes the config built here, maps
values to pixels, reports nearest-point hits and calls back through
:class:`RenderHooks`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from mcflation.core.models.series import ChartKind, PlotPoint, SeriesRole, SeriesSet

PALETTE = {
    "gold": "#ffd700",
    "red": "#db1020",
    "green": "#27742d",
    "cream": "#f9f5f5",
    "black": "#111111",
}
GRID_COLOR = "rgba(17, 17, 17, 0.08)"
TRANSPARENT = "rgba(0, 0, 0, 0)"

X_TICK_STEP = 5
Y_MIN = 0
Y_MAX = 5
MARKER_GLYPH = "😢"
MARKER_VALUE = Decimal("0.25")
MISSING_MARKER_PLUGIN_ID = "missingMarkerPlugin"


@dataclass(frozen=True, slots=True)
class MarkerGlyph:
    """A missing-year glyph placed in pixel space."""

    year: int
    x: float
    y: float
    glyph: str = MARKER_GLYPH


@runtime_checkable
class RenderHooks(Protocol):
    """Callbacks a renderer exposes to the chart pipeline."""

    def on_after_draw(self, markers: Sequence[MarkerGlyph]) -> None: ...

    def on_tooltip_update(self, point: PlotPoint | None) -> None: ...


@runtime_checkable
class ChartRenderer(RenderHooks, Protocol):
    """A renderer that can also hit-test pointer positions."""

    def nearest_index(self, x: float, y: float) -> int | None: ...


@dataclass(frozen=True, slots=True)
class LinearScale:
    """Linear mapping between a value domain and a pixel range."""

    domain_min: float
    domain_max: float
    pixel_min: float
    pixel_max: float

    def pixel_for_value(self, value: float | Decimal) -> float:
        span = self.domain_max - self.domain_min
        if span == 0:
            return (self.pixel_min + self.pixel_max) / 2
        ratio = (float(value) - self.domain_min) / span
        return self.pixel_min + ratio * (self.pixel_max - self.pixel_min)

    def value_for_pixel(self, pixel: float) -> float:
        span = self.pixel_max - self.pixel_min
        if span == 0:
            return self.domain_min
        ratio = (pixel - self.pixel_min) / span
        return self.domain_min + ratio * (self.domain_max - self.domain_min)


@dataclass(frozen=True, slots=True)
class MissingMarkerLayer:
    """Annotation layer drawing a glyph at each missing year after the series."""

    missing_years: tuple[int, ...]
    value: Decimal = MARKER_VALUE
    glyph: str = MARKER_GLYPH

    def layout(self, x_scale: LinearScale, y_scale: LinearScale) -> list[MarkerGlyph]:
        y = y_scale.pixel_for_value(self.value)
        return [
            MarkerGlyph(year=year, x=x_scale.pixel_for_value(year), y=y, glyph=self.glyph)
            for year in self.missing_years
        ]

    def after_draw(self, hooks: RenderHooks, x_scale: LinearScale, y_scale: LinearScale) -> list[MarkerGlyph]:
        markers = self.layout(x_scale, y_scale)
        if markers:
            hooks.on_after_draw(markers)
        return markers


def x_scale_for(series_set: SeriesSet, pixel_min: float, pixel_max: float) -> LinearScale:
    if not series_set.axis:
        return LinearScale(0, 0, pixel_min, pixel_max)
    return LinearScale(series_set.axis[0], series_set.axis[-1], pixel_min, pixel_max)


def y_scale_for(pixel_bottom: float, pixel_top: float) -> LinearScale:
    return LinearScale(Y_MIN, Y_MAX, pixel_bottom, pixel_top)


def _axis(title: str, **overrides: Any) -> dict[str, Any]:
    axis: dict[str, Any] = {
        "ticks": {"color": PALETTE["black"]},
        "grid": {"color": GRID_COLOR},
        "title": {
            "display": True,
            "text": title,
            "color": PALETTE["black"],
            "font": {"weight": "600"},
        },
    }
    axis.update(overrides)
    return axis


def _scales() -> dict[str, Any]:
    x_axis = _axis("Year", type="linear")
    x_axis["ticks"]["stepSize"] = X_TICK_STEP
    y_axis = _axis("Price (USD)", min=Y_MIN, max=Y_MAX)
    # Intl.NumberFormat options, rendered as "$1.00"
    y_axis["ticks"]["format"] = {
        "style": "currency",
        "currency": "USD",
        "minimumFractionDigits": 2,
        "maximumFractionDigits": 2,
    }
    return {"x": x_axis, "y": y_axis}


def _line_datasets(series_set: SeriesSet) -> list[dict[str, Any]]:
    datasets: list[dict[str, Any]] = []
    for series in series_set.series:
        data = [point.to_dict() for point in series.points]
        if series.role is SeriesRole.HOVER:
            datasets.append(
                {
                    "label": series.label,
                    "data": data,
                    "showLine": False,
                    "pointRadius": 0,
                    "pointHoverRadius": 6,
                    "hitRadius": 12,
                    "borderColor": TRANSPARENT,
                    "backgroundColor": TRANSPARENT,
                    "order": 0,
                }
            )
        elif series.role is SeriesRole.MIN:
            datasets.append(
                {
                    "label": series.label,
                    "data": data,
                    "borderColor": PALETTE["green"],
                    "backgroundColor": "rgba(39, 116, 45, 0.15)",
                    "pointBackgroundColor": PALETTE["green"],
                    "pointRadius": 3,
                    "tension": 0.25,
                    "fill": False,
                    "spanGaps": False,
                }
            )
        else:
            datasets.append(
                {
                    "label": series.label,
                    "data": data,
                    "borderColor": PALETTE["red"],
                    "backgroundColor": "rgba(219, 16, 32, 0.18)",
                    "pointBackgroundColor": PALETTE["red"],
                    "pointRadius": 3,
                    "tension": 0.25,
                    "fill": "-1",
                    "spanGaps": False,
                }
            )
    return datasets


def _bar_range_datasets(series_set: SeriesSet) -> list[dict[str, Any]]:
    min_series = series_set.get(SeriesRole.MIN)
    max_series = series_set.get(SeriesRole.MAX)
    if min_series is None or max_series is None:
        return []
    data = []
    for low, high in zip(min_series.points, max_series.points, strict=True):
        entry = low.to_dict()
        if low.value is None or high.value is None:
            entry["y"] = None
        else:
            entry["y"] = [float(low.value), float(high.value)]
        data.append(entry)
    return [
        {
            "label": "Price range",
            "data": data,
            "backgroundColor": "rgba(219, 16, 32, 0.35)",
            "borderColor": PALETTE["red"],
            "borderWidth": 1,
            "borderSkipped": False,
        }
    ]


def build_chart_config(series_set: SeriesSet, kind: ChartKind = ChartKind.LINE) -> dict[str, Any]:
    """Chart.js style config for ``series_set``.

    Gap points keep their x position with ``y: null``.
    """

    if kind is ChartKind.BAR_RANGE:
        chart_type = "bar"
        datasets = _bar_range_datasets(series_set)
    else:
        chart_type = "line"
        datasets = _line_datasets(series_set)

    return {
        "type": chart_type,
        "data": {"datasets": datasets},
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "parsing": False,
            "interaction": {"mode": "nearest", "intersect": False},
            "plugins": {
                "legend": {
                    "display": True,
                    "labels": {"color": PALETTE["black"], "usePointStyle": True},
                },
                "tooltip": {"enabled": False, "external": "lockableTooltip"},
                MISSING_MARKER_PLUGIN_ID: {
                    "missingYears": list(series_set.missing_years),
                    "glyph": MARKER_GLYPH,
                    "value": float(MARKER_VALUE),
                },
            },
            "scales": _scales(),
        },
    }


__all__ = [
    "ChartRenderer",
    "LinearScale",
    "MarkerGlyph",
    "MissingMarkerLayer",
    "PALETTE",
    "RenderHooks",
    "build_chart_config",
    "x_scale_for",
    "y_scale_for",
]
