"""Schemas package."""

from parking_reservations.schemas.auth import AdminSessionResponse, LoginRequest
from parking_reservations.schemas.booking import BookingCreate, BookingResponse
from parking_reservations.schemas.report import ReportCreate, ReportResponse
from parking_reservations.schemas.slot import SlotCreate, SlotResponse, SlotSeed
from parking_reservations.schemas.stats import ParkingStatsResponse

__all__ = [
    "AdminSessionResponse",
    "LoginRequest",
    "BookingCreate",
    "BookingResponse",
    "ReportCreate",
    "ReportResponse",
    "SlotCreate",
    "SlotResponse",
    "SlotSeed",
    "ParkingStatsResponse",
]
