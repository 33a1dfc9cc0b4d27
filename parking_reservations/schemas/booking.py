"""Booking schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from parking_reservations.core.domain import BookingStatus


class BookingCreate(BaseModel):
    """Schema for booking a slot."""

    slot_id: str
    customer_name: str = Field(..., max_length=255)
    vehicle_number: str = Field(..., max_length=64)


class BookingResponse(BaseModel):
    """Schema for booking response."""

    id: str
    slot_id: str
    customer_name: str
    vehicle_number: str
    created_at: datetime
    status: BookingStatus

    model_config = {"from_attributes": True}
