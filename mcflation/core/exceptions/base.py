"""mcflation core exceptions."""

from typing import Any


class PriceChartError(Exception):
    """Base exception for the price chart pipeline."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: human readable message
            error_code: stable machine readable code
            details: extra context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class SourceUnavailableError(PriceChartError):
    """The whole dataset could not be obtained."""

    def __init__(
        self,
        message: str,
        candidates: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if candidates:
            super_details["candidates"] = candidates
        super().__init__(message, "SOURCE_UNAVAILABLE", super_details)
        self.candidates = candidates or []


class ConfigurationError(PriceChartError):
    """Invalid configuration value."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if key:
            super_details["key"] = key
        super().__init__(message, "CONFIGURATION_ERROR", super_details)
        self.key = key
