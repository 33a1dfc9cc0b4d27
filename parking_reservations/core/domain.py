"""Slot, booking and report records."""

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SlotStatus(str, enum.Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    OCCUPIED = "occupied"


class BookingStatus(str, enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class Slot:
    """A single parking space.

    ``active_booking_id`` is set exactly when the status is not available.
    """

    id: str
    number: str
    status: SlotStatus = SlotStatus.AVAILABLE
    active_booking_id: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_available(self) -> bool:
        return self.status == SlotStatus.AVAILABLE


@dataclass(frozen=True)
class Booking:
    """A customer's claim on a slot. Kept as history once terminal."""

    id: str
    slot_id: str
    customer_name: str
    vehicle_number: str
    created_at: datetime = field(default_factory=utcnow)
    status: BookingStatus = BookingStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE


@dataclass(frozen=True)
class Report:
    """An issue filed against a slot."""

    id: str
    slot_id: str
    slot_number: str
    reporter_name: str
    message: str
    created_at: datetime = field(default_factory=utcnow)
    status: ReportStatus = ReportStatus.PENDING


@dataclass(frozen=True)
class AdminSession:
    username: str
    authenticated: bool = True


@dataclass(frozen=True)
class ParkingStats:
    """Dashboard counters."""

    total_slots: int
    available_slots: int
    reserved_slots: int
    occupied_slots: int
    active_bookings: int
    pending_reports: int
    today_bookings: int
    occupancy_rate: float
    timestamp: datetime
