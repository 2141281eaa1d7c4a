"""Helpers shared by the dataset commands."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import typer

from .constants import OUTPUT_EXIT_CODE
from .formatters import OutputFormatter, create_formatter


@dataclass(slots=True)
class CLIOptions:
    """Global options stored on the Typer context by the app callback."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False
    csv_path: Path | None = None

    @classmethod
    def from_context(cls, ctx: typer.Context) -> CLIOptions:
        ctx.ensure_object(dict)
        return cls(**{key: value for key, value in ctx.obj.items() if key in cls.__slots__})


@contextmanager
def open_output(ctx: typer.Context) -> Iterator[tuple[OutputFormatter, TextIO]]:
    """Yield the formatter and the stream (stdout or ``--output``) for a command."""

    options = CLIOptions.from_context(ctx)
    formatter = create_formatter(options.format, no_color=options.no_color)
    if options.output_path is None:
        yield formatter, sys.stdout
        return

    try:
        handle = open(options.output_path, "w", encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to open '{options.output_path}': {exc}", "OUTPUT_WRITE_ERROR")
        raise typer.Exit(code=OUTPUT_EXIT_CODE) from exc
    with handle:
        yield formatter, handle


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Write ``{"code", "message", "details"}`` as one JSON line to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = dict(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


__all__ = ["CLIOptions", "emit_error", "open_output"]
