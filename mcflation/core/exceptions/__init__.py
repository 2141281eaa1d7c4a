"""Exception handling module."""

from mcflation.core.exceptions.base import (
    ConfigurationError,
    PriceChartError,
    SourceUnavailableError,
)

__all__ = [
    "PriceChartError",
    "SourceUnavailableError",
    "ConfigurationError",
]
