"""Plot series models shared by the series builder and chart description."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class SeriesMode(str, Enum):
    """How the year axis treats unavailable rows."""

    GAP_PRESERVING = "gap_preserving"
    AVAILABILITY_FILTERED = "availability_filtered"


class SeriesRole(str, Enum):
    """Role of a series within a :class:`SeriesSet`."""

    MIN = "min"
    MAX = "max"
    HOVER = "hover"


class ChartKind(str, Enum):
    """Chart flavours understood by the chart description."""

    LINE = "line"
    BAR_RANGE = "bar_range"


@dataclass(frozen=True, slots=True)
class PlotPoint:
    """A per-series, per-year rendering unit.

    ``value`` is ``None`` for a gap, which is different from a real zero.
    """

    year: int
    value: Decimal | None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    available: bool | None = None
    notes: str | None = None
    source_summary: str = ""

    @property
    def is_gap(self) -> bool:
        return self.value is None

    def to_dict(self) -> dict[str, object]:
        return {
            "x": self.year,
            "y": _as_number(self.value),
            "minPrice": _as_number(self.min_price),
            "maxPrice": _as_number(self.max_price),
            "available": self.available,
            "notes": self.notes,
            "sources": self.source_summary,
        }


@dataclass(frozen=True, slots=True)
class Series:
    """A named series with one point per axis year."""

    label: str
    role: SeriesRole
    points: tuple[PlotPoint, ...]

    @property
    def values(self) -> list[Decimal | None]:
        return [point.value for point in self.points]

    @property
    def years(self) -> list[int]:
        return [point.year for point in self.points]

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True, slots=True)
class SeriesSet:
    """Ordered series sharing one year axis, plus the missing-year annotations."""

    axis: tuple[int, ...]
    series: tuple[Series, ...]
    missing_years: tuple[int, ...] = ()
    mode: SeriesMode = SeriesMode.GAP_PRESERVING
    duplicate_years: tuple[int, ...] = ()

    def get(self, role: SeriesRole) -> Series | None:
        for item in self.series:
            if item.role is role:
                return item
        return None

    @property
    def hover(self) -> Series | None:
        return self.get(SeriesRole.HOVER)

    @property
    def labels(self) -> list[str]:
        return [item.label for item in self.series]

    def point_at(self, index: int) -> PlotPoint | None:
        """Return the point that tooltips show for ``index``.

        The hover proxy is preferred because it has a target at every axis year.
        """
        if index < 0 or index >= len(self.axis):
            return None
        primary = self.hover or (self.series[0] if self.series else None)
        if primary is None:
            return None
        return primary.points[index]


def _as_number(value: Decimal | None) -> float | None:
    return None if value is None else float(value)
