"""Command line interface entry points for mcflation."""

from .main import app, create_app

__all__ = ["app", "create_app"]
