"""Display helpers for tooltips, ticks and provenance text."""

from __future__ import annotations

import re
from decimal import Decimal

from markupsafe import Markup, escape

from mcflation.core.models.records import CanonicalRow
from mcflation.core.models.series import PlotPoint

NO_SOURCES = "No sources listed."
SOURCE_SEPARATOR = " | "
URL_PATTERN = re.compile(r"https?://[^\s;]+")


def summarize_sources(row: CanonicalRow | None) -> str:
    """Join the provenance fields in display order, or return the sentinel."""

    if row is None:
        return NO_SOURCES
    summary = SOURCE_SEPARATOR.join(source for source in row.sources if source)
    return summary or NO_SOURCES


def linkify(text: str | None) -> Markup:
    """Escape ``text`` and turn http(s) URLs into new-tab links without a referrer.

    URLs stop at whitespace and at semicolons, which the dataset uses as a list
    separator.
    """

    if not text:
        return Markup("")

    parts: list[Markup] = []
    position = 0
    for match in URL_PATTERN.finditer(text):
        parts.append(escape(text[position : match.start()]))
        url = escape(match.group(0))
        parts.append(Markup('<a href="{0}" target="_blank" rel="noreferrer">{0}</a>').format(url))
        position = match.end()
    parts.append(escape(text[position:]))
    return Markup("").join(parts)


def format_price(value: Decimal | float | None) -> str:
    if value is None:
        return "N/A"
    return f"${Decimal(str(value)):.2f}"


def format_tick(value: Decimal | float | int) -> str:
    """Y-axis tick label with two decimals."""

    return f"${Decimal(str(value)):.2f}"


def availability_label(available: bool | None) -> str:
    if available is False:
        return "Not Available"
    if available is True:
        return "Available"
    return "Unspecified"


def render_tooltip(point: PlotPoint) -> Markup:
    """Tooltip body for a plot point."""

    notes = linkify(point.notes) if point.notes else Markup("None")
    sources = linkify(point.source_summary) if point.source_summary else Markup(NO_SOURCES)
    price_range = f"Range: {format_price(point.min_price)} – {format_price(point.max_price)}"
    return Markup(
        '<div class="tooltip-title">{year}</div>'
        '<div class="tooltip-range">{price_range}</div>'
        '<div class="tooltip-section"><strong>Availability:</strong> {availability}</div>'
        '<div class="tooltip-section"><strong>Notes:</strong> {notes}</div>'
        '<div class="tooltip-section"><strong>Sources:</strong> {sources}</div>'
    ).format(
        year=point.year,
        price_range=price_range,
        availability=availability_label(point.available),
        notes=notes,
        sources=sources,
    )


__all__ = [
    "NO_SOURCES",
    "SOURCE_SEPARATOR",
    "availability_label",
    "format_price",
    "format_tick",
    "linkify",
    "render_tooltip",
    "summarize_sources",
]
