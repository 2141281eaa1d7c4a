"""Data models module."""

from mcflation.core.models.interaction import InteractionState
from mcflation.core.models.records import CanonicalRow, RawRecord
from mcflation.core.models.series import (
    ChartKind,
    PlotPoint,
    Series,
    SeriesMode,
    SeriesRole,
    SeriesSet,
)

__all__ = [
    "CanonicalRow",
    "RawRecord",
    "PlotPoint",
    "Series",
    "SeriesSet",
    "SeriesMode",
    "SeriesRole",
    "ChartKind",
    "InteractionState",
]
