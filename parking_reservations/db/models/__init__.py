"""Database models package."""

from parking_reservations.db.base import Base
from parking_reservations.db.models.booking import SlotBooking
from parking_reservations.db.models.report import SlotReport
from parking_reservations.db.models.slot import ParkingSlot

__all__ = [
    "Base",
    "ParkingSlot",
    "SlotBooking",
    "SlotReport",
]
