"""
Pydantic models for ship data.

``ShipBase`` holds the caller-supplied fields, all optional so that
the service layer can report a missing field as its own bad request
instead of a generic validation failure.  ``ShipCreate`` and
``ShipUpdate`` are the request bodies; ``ShipRead`` is the response.
Field names are snake_case in Python and camelCase on the wire.
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from space_api.app.services.rating import round_half_even


class ShipType(str, Enum):
    TRANSPORT = "TRANSPORT"
    MILITARY = "MILITARY"
    MERCHANT = "MERCHANT"


class ShipOrder(str, Enum):
    """Sort keys accepted by the list endpoint, mapped to table columns."""

    ID = "ID"
    SPEED = "SPEED"
    DATE = "DATE"
    RATING = "RATING"

    @property
    def column(self) -> str:
        return {
            ShipOrder.ID: "id",
            ShipOrder.SPEED: "speed",
            ShipOrder.DATE: "prod_date",
            ShipOrder.RATING: "rating",
        }[self]


class ShipBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, examples=["Orion III"])
    planet: Optional[str] = Field(None, examples=["Mars"])
    ship_type: Optional[ShipType] = Field(None, alias="shipType", examples=["MILITARY"])
    prod_date: Optional[int] = Field(
        None,
        alias="prodDate",
        description="Production date in milliseconds since the epoch (UTC)",
        examples=[32503680000000],
    )
    is_used: Optional[bool] = Field(None, alias="isUsed", examples=[False])
    speed: Optional[float] = Field(None, examples=[0.82])
    crew_size: Optional[int] = Field(None, alias="crewSize", examples=[617])

    @field_validator("speed")
    @classmethod
    def round_speed(cls, v):
        # Out-of-range magnitudes are left for the service to reject.
        if v is None or not math.isfinite(v) or abs(v) >= 1:
            return v
        return round_half_even(v)


class ShipCreate(ShipBase):
    """Schema for creating a ship.  ``isUsed`` defaults to false in the service."""


class ShipUpdate(ShipBase):
    """Schema for updating a ship.

    All fields are optional; only provided, non-null fields are applied.
    """


class ShipRead(BaseModel):
    """Schema for reading a ship from the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    planet: str
    ship_type: ShipType = Field(..., alias="shipType")
    prod_date: int = Field(..., alias="prodDate")
    is_used: bool = Field(..., alias="isUsed")
    speed: float
    crew_size: int = Field(..., alias="crewSize")
    rating: float
