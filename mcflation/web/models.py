"""Web API response models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mcflation.core.models import CanonicalRow, ChartKind, SeriesMode


class PricesResponse(BaseModel):
    """Normalized dataset payload."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[CanonicalRow] = Field(..., description="Normalized rows sorted by year")
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        alias="updatedAt",
        description="Time the dataset was read",
    )


class ChartResponse(BaseModel):
    """Declarative chart description for the browser renderer."""

    model_config = ConfigDict(populate_by_name=True)

    mode: SeriesMode
    kind: ChartKind
    axis: list[int] = Field(..., description="Sorted years shared by every series")
    missing_years: list[int] = Field(..., alias="missingYears")
    duplicate_years: list[int] = Field(default_factory=list, alias="duplicateYears")
    config: dict[str, Any] = Field(..., description="Chart.js style configuration")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="updatedAt")


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    """Error payload"""

    error: str = Field(..., description="Error message")
