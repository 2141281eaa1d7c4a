"""``mcflation`` command line entry point."""

from __future__ import annotations

import os
from pathlib import Path

import typer

from mcflation.core.config import ConfigManager
from mcflation.core.logging import configure_logging

from .data import register as register_data_commands
from .formatters import FORMATS, create_formatter


def _global_options(
    ctx: typer.Context,
    output_format: str = typer.Option("table", "--format", "-f", help=f"One of: {', '.join(FORMATS)}."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write rows to this file instead of stdout."),
    csv_path: Path | None = typer.Option(
        None,
        "--csv",
        envvar="MCFLATION_CSV_PATH",
        help="CSV dataset tried before the packaged one.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Minimum level of log lines on stderr."),
    no_color: bool = typer.Option(False, "--no-color", help="Plain table output."),
) -> None:
    """Historical McChicken prices: inspect the dataset or serve the chart API."""

    try:
        create_formatter(output_format)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--format") from exc

    ctx.ensure_object(dict)
    ctx.obj.update(
        format=output_format.strip().lower(),
        output_path=output,
        csv_path=csv_path,
        no_color=no_color,
    )
    configure_logging(level=log_level, format="console")


def serve_command(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Bind address (default from config)."),
    port: int | None = typer.Option(None, "--port", help="Listen port (default from config or PORT)."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
) -> None:
    """Run the HTTP API under uvicorn."""

    from mcflation.web.main import serve

    csv_path = (ctx.obj or {}).get("csv_path")
    if csv_path is not None:
        # The worker process builds its own app, so hand the path over through the environment
        os.environ["MCFLATION_CSV_PATH"] = str(csv_path)

    server_updates: dict[str, object] = {"reload": reload}
    if host is not None:
        server_updates["host"] = host
    if port is not None:
        server_updates["port"] = port

    manager = ConfigManager()
    manager.update_config(server=server_updates)
    serve(manager.get_config())


def create_app() -> typer.Typer:
    """Build the Typer application with every command registered."""

    app = typer.Typer(add_completion=False, no_args_is_help=True)
    app.callback()(_global_options)
    app.command("serve")(serve_command)
    register_data_commands(app)
    return app


app = create_app()
