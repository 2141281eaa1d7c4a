"""Top-level chart load routine and its error boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from mcflation.core.data.sources import DataSource
from mcflation.core.exceptions import SourceUnavailableError
from mcflation.core.models.interaction import InteractionState
from mcflation.core.models.records import CanonicalRow
from mcflation.core.models.series import ChartKind, PlotPoint, SeriesMode, SeriesSet
from mcflation.core.monitoring.metrics import get_metrics_collector
from mcflation.core.services.chart import (
    LinearScale,
    MarkerGlyph,
    MissingMarkerLayer,
    RenderHooks,
    build_chart_config,
)
from mcflation.core.services.interaction import InteractionController
from mcflation.core.services.normalizer import drop_yearless, normalize_with_stats
from mcflation.core.services.series import build_series


@dataclass(frozen=True, slots=True)
class ErrorState:
    """Static replacement for the chart area when the dataset cannot be loaded."""

    title: str = "Unable to load chart data."
    detail: str = "Please check the CSV and try again."


def load_rows(source: DataSource) -> list[CanonicalRow]:
    """Read, normalize and sort rows; rows without a year are dropped."""

    result = normalize_with_stats(source.read())
    get_metrics_collector().record_degraded_fields(dict(result.degraded))
    return drop_yearless(result.rows)


class ChartSession:
    """One mounted chart: loads once, then routes pointer events to its controller."""

    def __init__(
        self,
        source: DataSource,
        hooks: RenderHooks | None = None,
        *,
        mode: SeriesMode = SeriesMode.GAP_PRESERVING,
        include_hover_proxy: bool = True,
        kind: ChartKind = ChartKind.LINE,
        fill_years: bool = False,
    ) -> None:
        self.source = source
        self.hooks = hooks
        self.mode = mode
        self.include_hover_proxy = include_hover_proxy and kind is ChartKind.LINE
        self.kind = kind
        self.fill_years = fill_years
        self.rows: list[CanonicalRow] = []
        self.series_set: SeriesSet | None = None
        self.config: dict[str, Any] | None = None
        self.error: ErrorState | None = None
        self._controller: InteractionController | None = None

    @property
    def loaded(self) -> bool:
        return self.series_set is not None

    @property
    def state(self) -> InteractionState | None:
        return self._controller.state if self._controller else None

    def load(self) -> bool:
        """Load the dataset once and build the chart; ``False`` means error state."""

        try:
            rows = load_rows(self.source)
        except SourceUnavailableError as exc:
            logger.bind(source=self.source.name, error_code=exc.error_code).error(exc.message)
            self.error = ErrorState()
            self.series_set = None
            self.config = None
            self._controller = None
            return False

        self.rows = rows
        self.series_set = build_series(
            rows,
            mode=self.mode,
            include_hover_proxy=self.include_hover_proxy,
            fill_years=self.fill_years,
        )
        self.config = build_chart_config(self.series_set, self.kind)
        self._controller = InteractionController(self.series_set, self.hooks)
        self.error = None
        logger.bind(source=self.source.name).info(
            f"Chart mounted with {len(self.series_set.axis)} years, "
            f"{len(self.series_set.missing_years)} missing"
        )
        return True

    def draw_markers(self, x_scale: LinearScale, y_scale: LinearScale) -> list[MarkerGlyph]:
        """Lay out missing-year glyphs and hand them to the renderer's after-draw hook."""

        if self.series_set is None:
            return []
        layer = MissingMarkerLayer(self.series_set.missing_years)
        if self.hooks is None:
            return layer.layout(x_scale, y_scale)
        return layer.after_draw(self.hooks, x_scale, y_scale)

    def click(self, hit: int | None) -> InteractionState | None:
        if self._controller is None:
            return None
        return self._controller.on_click(hit)

    def hover(self, hit: int | None) -> PlotPoint | None:
        if self._controller is None:
            return None
        return self._controller.on_hover(hit)

    def teardown(self) -> None:
        if self._controller is not None:
            self._controller.reset()
        self._controller = None


__all__ = ["ChartSession", "ErrorState", "load_rows"]
