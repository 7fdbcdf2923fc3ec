"""Ticker entry data model."""

from pydantic import BaseModel, Field


class TickerEntry(BaseModel):
    """One row of the VBOX market ticker."""

    id: str = Field(..., min_length=1, description="Instrument id")
    commodity: str = Field(..., description="Commodity name")
    variety: str = Field(default="", description="Commodity variety")
    emoji: str = Field(default="", description="Display emoji")
    price: float = Field(..., description="Current price per kg")
    change: float = Field(default=0.0, description="Price change from previous close")
    change_percent: float = Field(
        default=0.0, alias="changePercent", description="Percentage change"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def label(self) -> str:
        """Display label used for alerts."""
        if self.variety:
            return f"{self.commodity} ({self.variety})"
        return self.commodity
