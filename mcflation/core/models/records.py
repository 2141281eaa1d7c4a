"""Canonical price record models."""

from collections.abc import Mapping
from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer
from pydantic import ConfigDict as PydanticConfigDict

RawRecord = Mapping[str, str | None]


class CanonicalRow(BaseModel):
    """One year's normalized price observation."""

    year: int | None = None
    available: bool | None = None
    min_price: Decimal | None = Field(default=None, alias="minPrice")
    max_price: Decimal | None = Field(default=None, alias="maxPrice")
    notes: str | None = None
    source_history: str | None = Field(default=None, alias="sourceHistory")
    source_cpi_context: str | None = Field(default=None, alias="sourceCpiContext")
    source_value_menu_anchors: str | None = Field(default=None, alias="sourceValueMenuAnchors")
    source_recent_pricing_anchors: str | None = Field(default=None, alias="sourceRecentPricingAnchors")

    model_config = PydanticConfigDict(populate_by_name=True, frozen=True)

    @field_serializer("min_price", "max_price", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize prices as JSON numbers."""
        if value is None:
            return None
        return float(value)

    @property
    def sources(self) -> tuple[str | None, str | None, str | None, str | None]:
        """Provenance fields in display order."""
        return (
            self.source_history,
            self.source_cpi_context,
            self.source_value_menu_anchors,
            self.source_recent_pricing_anchors,
        )

    @property
    def has_inverted_range(self) -> bool:
        """True when both prices are present and min exceeds max."""
        if self.min_price is None or self.max_price is None:
            return False
        return self.min_price > self.max_price
