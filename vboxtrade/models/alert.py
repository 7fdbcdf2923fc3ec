"""Alert data model."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AlertDirection(str, Enum):
    """Crossing direction an alert watches for."""

    BELOW = "below"
    ABOVE = "above"


class Alert(BaseModel):
    """Represents a user-defined price alert on one instrument."""

    id: str = Field(..., min_length=1, description="Unique alert identifier")
    instrument_id: str = Field(..., min_length=1, description="Commodity/variety id")
    instrument_label: str = Field(..., description="Display name, e.g. 'Onion (Red Onion)'")
    target_price: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Threshold price"
    )
    direction: AlertDirection = Field(
        default=AlertDirection.BELOW, description="Crossing direction"
    )
    enabled: bool = Field(default=True, description="Whether alert is evaluated")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Alert creation timestamp"
    )
    triggered_at: Optional[datetime] = Field(
        default=None, description="When the alert last fired"
    )

    model_config = {"frozen": True}

    @property
    def is_triggered(self) -> bool:
        return self.triggered_at is not None

    @property
    def is_armed(self) -> bool:
        """Enabled and not yet triggered."""
        return self.enabled and self.triggered_at is None
