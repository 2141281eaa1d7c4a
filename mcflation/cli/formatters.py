"""Output formats for the dataset commands: a rich table or JSON Lines."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

Row = Mapping[str, object]

FORMATS = ("table", "jsonl")


def _project(rows: Sequence[Row], columns: Sequence[str] | None) -> tuple[list[str], list[dict[str, object]]]:
    if columns:
        names = list(columns)
    else:
        names = list(rows[0]) if rows else []
    return names, [{name: row.get(name) for name in names} for row in rows]


class OutputFormatter:
    """Renders flat rows; ``columns`` fixes both selection and order."""

    name: str

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    name: str = "table"
    no_color: bool = False
    missing: str = "-"

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        names, projected = _project(rows, columns)
        console = Console(file=stream, no_color=self.no_color, color_system=None if self.no_color else "auto")

        table = Table(box=SIMPLE)
        for name in names:
            table.add_column(name, header_style="" if self.no_color else "bold")
        for row in projected:
            table.add_row(*(self.cell(row[name]) for name in names))

        if names:
            console.print(table)
        if not projected:
            console.print("No data available.")

    def cell(self, value: object) -> str:
        if value is None:
            return self.missing
        if isinstance(value, Decimal):
            return f"{value:.2f}"
        if isinstance(value, bool):
            return "yes" if value else "no"
        return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """One JSON object per row; prices become JSON numbers."""

    name: str = "jsonl"

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        _, projected = _project(rows, columns)
        for row in projected:
            stream.write(json.dumps(row, ensure_ascii=False, default=_to_json))
            stream.write("\n")
        stream.flush()


def _to_json(value: object) -> object:
    if isinstance(value, Decimal):
        return float(value)
    return str(value)


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(FORMATS)}.")


__all__ = ["FORMATS", "JSONLFormatter", "OutputFormatter", "TableFormatter", "create_formatter"]
