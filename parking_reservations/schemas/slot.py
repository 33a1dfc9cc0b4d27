"""Slot schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from parking_reservations.core.domain import SlotStatus


class SlotCreate(BaseModel):
    """Schema for creating a slot."""

    number: str = Field(..., min_length=1, max_length=64)


class SlotSeed(BaseModel):
    """Schema for seeding a demo inventory."""

    count: int = Field(..., ge=0)
    reserved: int = Field(0, ge=0)
    occupied: int = Field(0, ge=0)
    row_width: int = Field(8, ge=1)


class SlotResponse(BaseModel):
    """Schema for slot response."""

    id: str
    number: str
    status: SlotStatus
    active_booking_id: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
