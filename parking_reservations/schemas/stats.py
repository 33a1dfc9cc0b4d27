"""Statistics schemas."""

from datetime import datetime

from pydantic import BaseModel


class ParkingStatsResponse(BaseModel):
    """Schema for dashboard statistics."""

    total_slots: int
    available_slots: int
    reserved_slots: int
    occupied_slots: int
    active_bookings: int
    pending_reports: int
    today_bookings: int
    occupancy_rate: float
    timestamp: datetime

    model_config = {"from_attributes": True}
