"""Tooltip lock state machine driven by click hit-test results."""

from __future__ import annotations

from loguru import logger

from mcflation.core.models.interaction import InteractionState
from mcflation.core.models.series import PlotPoint, SeriesSet
from mcflation.core.services.chart import RenderHooks


def transition(state: InteractionState, hit: int | None) -> InteractionState:
    """Next state after a click that hit point ``hit`` (``None`` for empty space)."""

    if hit is None:
        return InteractionState.unlocked()
    if state.locked and state.locked_index == hit:
        return InteractionState.unlocked()
    return InteractionState.locked_at(hit)


class InteractionController:
    """Owns the :class:`InteractionState` of one chart instance.

    The renderer only reads the outcome through ``hooks.on_tooltip_update``.
    """

    def __init__(self, series_set: SeriesSet, hooks: RenderHooks | None = None) -> None:
        self._series_set = series_set
        self._hooks = hooks
        self._state = InteractionState.unlocked()

    @property
    def state(self) -> InteractionState:
        return self._state

    def on_click(self, hit: int | None) -> InteractionState:
        """Apply a click and push the resulting highlight to the renderer."""

        if hit is not None and self._series_set.point_at(hit) is None:
            logger.bind(hit=hit).debug("Click index outside the year axis treated as a miss")
            hit = None
        self._state = transition(self._state, hit)
        self._emit(self.visible_point())
        return self._state

    def on_hover(self, hit: int | None) -> PlotPoint | None:
        """Forward hover highlights unless a tooltip is pinned."""

        if self._state.locked:
            point = self.visible_point()
        else:
            point = self._series_set.point_at(hit) if hit is not None else None
        self._emit(point)
        return point

    def visible_point(self) -> PlotPoint | None:
        if not self._state.locked or self._state.locked_index is None:
            return None
        return self._series_set.point_at(self._state.locked_index)

    def reset(self) -> None:
        self._state = InteractionState.unlocked()

    def _emit(self, point: PlotPoint | None) -> None:
        if self._hooks is not None:
            self._hooks.on_tooltip_update(point)


__all__ = ["InteractionController", "transition"]
