"""Record normalization: loosely typed table rows to :class:`CanonicalRow`."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from loguru import logger

from mcflation.core.models.records import CanonicalRow, RawRecord

YEAR_ALIASES: tuple[str, ...] = ("year", "Year")
AVAILABLE_ALIASES: tuple[str, ...] = ("available", "Available", "Availability")
MIN_PRICE_ALIASES: tuple[str, ...] = ("min_price", "Min_Price", "Minimum Price", "Price_Low_USD")
MAX_PRICE_ALIASES: tuple[str, ...] = ("max_price", "Max_Price", "Maximum Price", "Price_High_USD")
NOTES_ALIASES: tuple[str, ...] = ("notes", "Notes")
SOURCE_HISTORY_ALIASES: tuple[str, ...] = ("source_history", "Source_History")
SOURCE_CPI_CONTEXT_ALIASES: tuple[str, ...] = ("source_cpi_context", "Source_CPI_Context")
SOURCE_VALUE_MENU_ALIASES: tuple[str, ...] = ("source_value_menu_anchors", "Source_ValueMenu_Anchors")
SOURCE_RECENT_PRICING_ALIASES: tuple[str, ...] = (
    "source_recent_pricing_anchors",
    "Source_RecentPricing_Anchors",
)

TRUE_VALUES = frozenset({"true", "yes", "y", "1"})
FALSE_VALUES = frozenset({"false", "no", "n", "0"})
MAX_YEAR_DIGITS = 4


@dataclass(slots=True)
class NormalizationResult:
    """Normalized rows plus a count of fields that were present but unparseable."""

    rows: list[CanonicalRow]
    degraded: Counter[str] = field(default_factory=Counter)


def resolve_alias(record: Mapping[str, object], aliases: Sequence[str]) -> str | None:
    """Return the first non-empty value among ``aliases``, trimmed."""

    for alias in aliases:
        value = record.get(alias)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def parse_decimal(value: object) -> Decimal | None:
    """Parse a non-negative decimal amount; anything else becomes ``None``."""

    if value is None:
        return None
    text = str(value).strip().replace(",", "")
    if text.startswith("$"):
        text = text[1:].strip()
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite() or parsed < 0:
        return None
    return parsed


def parse_year(value: object) -> int | None:
    """Parse an integer year. Integral decimals such as ``"2020.0"`` are accepted."""

    parsed = parse_decimal(value)
    if parsed is None or parsed.adjusted() >= MAX_YEAR_DIGITS:
        return None
    if parsed != parsed.to_integral_value() or parsed < 1:
        return None
    return int(parsed)


def parse_bool(value: object) -> bool | None:
    """Map yes/no style text onto a tri-state availability flag."""

    if value is None:
        return None
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return None


def normalize_record(record: RawRecord, degraded: Counter[str] | None = None) -> CanonicalRow:
    """Normalize a single raw record. Never raises for a mapping input."""

    raw_year = resolve_alias(record, YEAR_ALIASES)
    raw_available = resolve_alias(record, AVAILABLE_ALIASES)
    raw_min = resolve_alias(record, MIN_PRICE_ALIASES)
    raw_max = resolve_alias(record, MAX_PRICE_ALIASES)

    year = parse_year(raw_year)
    available = parse_bool(raw_available)
    min_price = parse_decimal(raw_min)
    max_price = parse_decimal(raw_max)

    if degraded is not None:
        for name, raw, parsed in (
            ("year", raw_year, year),
            ("available", raw_available, available),
            ("min_price", raw_min, min_price),
            ("max_price", raw_max, max_price),
        ):
            if raw is not None and parsed is None:
                degraded[name] += 1

    return CanonicalRow(
        year=year,
        available=available,
        min_price=min_price,
        max_price=max_price,
        notes=resolve_alias(record, NOTES_ALIASES),
        source_history=resolve_alias(record, SOURCE_HISTORY_ALIASES),
        source_cpi_context=resolve_alias(record, SOURCE_CPI_CONTEXT_ALIASES),
        source_value_menu_anchors=resolve_alias(record, SOURCE_VALUE_MENU_ALIASES),
        source_recent_pricing_anchors=resolve_alias(record, SOURCE_RECENT_PRICING_ALIASES),
    )


def normalize_with_stats(raw_records: Iterable[RawRecord]) -> NormalizationResult:
    result = NormalizationResult(rows=[])
    for record in raw_records:
        result.rows.append(normalize_record(record, result.degraded))
    if result.degraded:
        logger.bind(degraded=dict(result.degraded)).debug(
            f"Normalized {len(result.rows)} records with unparseable fields"
        )
    return result


def normalize(raw_records: Iterable[RawRecord]) -> list[CanonicalRow]:
    """Normalize raw records into canonical rows, one per input record.

    Rows without a parseable year are kept here with ``year=None``; dropping
    them is the caller's job.
    """

    return normalize_with_stats(raw_records).rows


def drop_yearless(rows: Iterable[CanonicalRow]) -> list[CanonicalRow]:
    """Keep rows with a year, sorted ascending by year."""

    return sorted((row for row in rows if row.year), key=lambda row: row.year or 0)


__all__ = [
    "NormalizationResult",
    "drop_yearless",
    "normalize",
    "normalize_record",
    "normalize_with_stats",
    "parse_bool",
    "parse_decimal",
    "parse_year",
    "resolve_alias",
]
