"""Record stores backing the parking state manager."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from parking_reservations.core.domain import (
    Booking,
    BookingStatus,
    Report,
    ReportStatus,
    Slot,
    SlotStatus,
)
from parking_reservations.core.errors import PersistenceFailure
from parking_reservations.db.models import ParkingSlot, SlotBooking, SlotReport

logger = logging.getLogger(__name__)


@dataclass
class StoreSnapshot:
    """Full contents of a store."""

    slots: List[Slot] = field(default_factory=list)
    bookings: List[Booking] = field(default_factory=list)
    reports: List[Report] = field(default_factory=list)


@dataclass
class ChangeSet:
    """Records touched by a single mutation, written as one unit."""

    slots: Sequence[Slot] = ()
    bookings: Sequence[Booking] = ()
    reports: Sequence[Report] = ()
    removed_slot_ids: Sequence[str] = ()

    def __bool__(self) -> bool:
        return bool(self.slots or self.bookings or self.reports or self.removed_slot_ids)


class ParkingStore(ABC):
    """Interface of a persistence backend."""

    @abstractmethod
    async def load(self) -> StoreSnapshot:
        """Return every slot, booking and report."""

    @abstractmethod
    async def write(self, changes: ChangeSet) -> None:
        """Persist a change set atomically."""


class InMemoryStore(ParkingStore):
    """Keeps records in process memory. Used for tests and ``STORE_BACKEND=memory``."""

    def __init__(self, snapshot: Optional[StoreSnapshot] = None):
        snapshot = snapshot or StoreSnapshot()
        self.slots: Dict[str, Slot] = {s.id: s for s in snapshot.slots}
        self.bookings: Dict[str, Booking] = {b.id: b for b in snapshot.bookings}
        self.reports: Dict[str, Report] = {r.id: r for r in snapshot.reports}
        self.writes = 0

    async def load(self) -> StoreSnapshot:
        return StoreSnapshot(
            slots=list(self.slots.values()),
            bookings=sorted(self.bookings.values(), key=lambda b: b.created_at, reverse=True),
            reports=sorted(self.reports.values(), key=lambda r: r.created_at, reverse=True),
        )

    async def write(self, changes: ChangeSet) -> None:
        for slot in changes.slots:
            self.slots[slot.id] = slot
        for slot_id in changes.removed_slot_ids:
            self.slots.pop(slot_id, None)
        for booking in changes.bookings:
            self.bookings[booking.id] = booking
        for report in changes.reports:
            self.reports[report.id] = report
        self.writes += 1


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def slot_from_row(row: ParkingSlot) -> Slot:
    return Slot(
        id=row.id,
        number=row.number,
        status=SlotStatus(row.status),
        active_booking_id=row.active_booking_id,
        created_at=_aware(row.created_at),
    )


def booking_from_row(row: SlotBooking) -> Booking:
    return Booking(
        id=row.id,
        slot_id=row.slot_id,
        customer_name=row.customer_name,
        vehicle_number=row.vehicle_number,
        created_at=_aware(row.created_at),
        status=BookingStatus(row.status),
    )


def report_from_row(row: SlotReport) -> Report:
    return Report(
        id=row.id,
        slot_id=row.slot_id,
        slot_number=row.slot_number,
        reporter_name=row.reporter_name,
        message=row.message,
        created_at=_aware(row.created_at),
        status=ReportStatus(row.status),
    )


class SqlAlchemyStore(ParkingStore):
    """Stores records in a relational database through async SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def load(self) -> StoreSnapshot:
        try:
            async with self.session_factory() as session:
                slots = await session.execute(
                    select(ParkingSlot).order_by(ParkingSlot.created_at, ParkingSlot.number)
                )
                bookings = await session.execute(
                    select(SlotBooking).order_by(SlotBooking.created_at.desc())
                )
                reports = await session.execute(
                    select(SlotReport).order_by(SlotReport.created_at.desc())
                )
                return StoreSnapshot(
                    slots=[slot_from_row(row) for row in slots.scalars().all()],
                    bookings=[booking_from_row(row) for row in bookings.scalars().all()],
                    reports=[report_from_row(row) for row in reports.scalars().all()],
                )
        except SQLAlchemyError as exc:
            logger.error(f"Failed to load parking state: {exc}")
            raise PersistenceFailure(f"Could not load parking state: {exc}") from exc

    async def write(self, changes: ChangeSet) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    if changes.removed_slot_ids:
                        await session.execute(
                            delete(ParkingSlot).where(
                                ParkingSlot.id.in_(list(changes.removed_slot_ids))
                            )
                        )
                    for slot in changes.slots:
                        await session.merge(
                            ParkingSlot(
                                id=slot.id,
                                number=slot.number,
                                status=slot.status.value,
                                active_booking_id=slot.active_booking_id,
                                created_at=slot.created_at,
                            )
                        )
                    for booking in changes.bookings:
                        await session.merge(
                            SlotBooking(
                                id=booking.id,
                                slot_id=booking.slot_id,
                                customer_name=booking.customer_name,
                                vehicle_number=booking.vehicle_number,
                                created_at=booking.created_at,
                                status=booking.status.value,
                            )
                        )
                    for report in changes.reports:
                        await session.merge(
                            SlotReport(
                                id=report.id,
                                slot_id=report.slot_id,
                                slot_number=report.slot_number,
                                reporter_name=report.reporter_name,
                                message=report.message,
                                created_at=report.created_at,
                                status=report.status.value,
                            )
                        )
        except SQLAlchemyError as exc:
            logger.error(f"Failed to write parking state: {exc}")
            raise PersistenceFailure(f"Could not save parking state: {exc}") from exc
