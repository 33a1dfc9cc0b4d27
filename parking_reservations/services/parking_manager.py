"""Parking state manager: slots, bookings, reports and the admin session."""

import asyncio
import logging
import re
import secrets
import string
from dataclasses import replace
from typing import Dict, List, Mapping, Optional
from uuid import uuid4

from parking_reservations.core.domain import (
    AdminSession,
    Booking,
    BookingStatus,
    ParkingStats,
    Report,
    ReportStatus,
    Slot,
    SlotStatus,
    utcnow,
)
from parking_reservations.core.errors import (
    BookingNotFound,
    DuplicateSlot,
    InvalidInput,
    ReportNotFound,
    SlotNotAvailable,
    SlotNotFound,
    SlotNotRemovable,
    SlotNotReserved,
)
from parking_reservations.core.seeding import seed_layout
from parking_reservations.services.store import ChangeSet, ParkingStore

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.digits + string.ascii_uppercase
TOKEN_LENGTH = 9

SEED_CUSTOMER_NAME = "Walk-in"


def generate_token(length: int = TOKEN_LENGTH) -> str:
    """Random uppercase base-36 token."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def natural_key(label: str):
    """Sort key that orders A2 before A10."""
    return [
        (0, int(part), "") if part.isdecimal() else (1, 0, part)
        for part in re.split(r"(\d+)", label)
    ]


def _required(value: Optional[str], field_name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InvalidInput(f"{field_name} must not be blank")
    return value


class ParkingManager:
    """
    Sole owner and mutator of the parking collections.

    Every mutation runs under one lock and is written to the store before it
    is applied to the in-memory mirror, so a failed write leaves the mirror
    untouched and no two mutations interleave.
    """

    def __init__(self, store: ParkingStore, admin_username: str, admin_password: str):
        self.store = store
        self._admin_username = admin_username
        self._admin_password = admin_password
        self._lock = asyncio.Lock()
        self._slots: Dict[str, Slot] = {}
        self._bookings: Dict[str, Booking] = {}
        self._reports: Dict[str, Report] = {}
        self.admin_session: Optional[AdminSession] = None

    async def load(self) -> None:
        """Replace the mirror with the store's contents."""
        async with self._lock:
            snapshot = await self.store.load()
            self._slots = {slot.id: slot for slot in snapshot.slots}
            self._bookings = {booking.id: booking for booking in snapshot.bookings}
            self._reports = {report.id: report for report in snapshot.reports}
        logger.info(
            f"Loaded {len(self._slots)} slots, {len(self._bookings)} bookings, "
            f"{len(self._reports)} reports"
        )

    async def _commit(self, changes: ChangeSet) -> None:
        if not changes:
            return
        await self.store.write(changes)
        for slot_id in changes.removed_slot_ids:
            self._slots.pop(slot_id, None)
        for slot in changes.slots:
            self._slots[slot.id] = slot
        for booking in changes.bookings:
            self._bookings[booking.id] = booking
        for report in changes.reports:
            self._reports[report.id] = report

    def _new_id(self, taken: Mapping[str, object]) -> str:
        token = generate_token()
        while token in taken:
            token = generate_token()
        return token

    def _new_slot_id(self) -> str:
        return f"slot-{uuid4().hex[:12]}"

    # Lookups

    def get_slot(self, slot_id: str) -> Slot:
        slot = self._slots.get(slot_id)
        if slot is None:
            raise SlotNotFound(f"Parking slot with id {slot_id} not found")
        return slot

    def get_booking(self, booking_id: str) -> Booking:
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise BookingNotFound(f"Booking with id {booking_id} not found")
        return booking

    def get_report(self, report_id: str) -> Report:
        report = self._reports.get(report_id)
        if report is None:
            raise ReportNotFound(f"Report with id {report_id} not found")
        return report

    def _slot_number_taken(self, number: str) -> bool:
        return any(slot.number == number for slot in self._slots.values())

    # Slot inventory

    async def create_slot(self, number: str) -> Slot:
        """Add an available slot with a new, unique label."""
        number = _required(number, "Slot number")
        async with self._lock:
            if self._slot_number_taken(number):
                raise DuplicateSlot(f"Slot {number} already exists")

            slot = Slot(id=self._new_slot_id(), number=number)
            await self._commit(ChangeSet(slots=[slot]))

        logger.info(f"Created slot {slot.number} ({slot.id})")
        return slot

    async def remove_slot(self, slot_id: str) -> Slot:
        """Delete an available slot. Its booking history is kept."""
        async with self._lock:
            slot = self.get_slot(slot_id)
            if not slot.is_available:
                logger.warning(f"Refused to remove slot {slot.number} while {slot.status.value}")
                raise SlotNotRemovable(
                    f"Slot {slot.number} is {slot.status.value} and cannot be removed"
                )
            await self._commit(ChangeSet(removed_slot_ids=[slot.id]))

        logger.info(f"Removed slot {slot.number} ({slot.id})")
        return slot

    async def reset_all_slots(self) -> None:
        """Cancel every active booking and free every slot."""
        async with self._lock:
            bookings = [
                replace(booking, status=BookingStatus.CANCELLED)
                for booking in self._bookings.values()
                if booking.is_active
            ]
            slots = [
                replace(slot, status=SlotStatus.AVAILABLE, active_booking_id=None)
                for slot in self._slots.values()
                if not slot.is_available or slot.active_booking_id is not None
            ]
            await self._commit(ChangeSet(slots=slots, bookings=bookings))

        logger.info(f"Reset all slots: cancelled {len(bookings)} bookings, freed {len(slots)} slots")

    async def seed_slots(
        self,
        count: int,
        distribution: Optional[Mapping[SlotStatus, int]] = None,
        row_width: int = 8,
    ) -> List[Slot]:
        """
        Create a deterministic demo inventory.

        Held slots get an active walk-in booking so every seeded slot is
        consistent with its booking from the start.
        """
        layout = seed_layout(count, distribution, row_width)
        async with self._lock:
            numbers = [number for number, _ in layout]
            for number in numbers:
                if self._slot_number_taken(number):
                    raise DuplicateSlot(f"Slot {number} already exists")

            slots: List[Slot] = []
            bookings: List[Booking] = []
            taken_booking_ids = dict(self._bookings)
            for number, status in layout:
                slot_id = self._new_slot_id()
                booking_id = None
                if status != SlotStatus.AVAILABLE:
                    booking_id = self._new_id(taken_booking_ids)
                    booking = Booking(
                        id=booking_id,
                        slot_id=slot_id,
                        customer_name=SEED_CUSTOMER_NAME,
                        vehicle_number=f"SEED-{number}",
                    )
                    taken_booking_ids[booking_id] = booking
                    bookings.append(booking)
                slots.append(
                    Slot(id=slot_id, number=number, status=status, active_booking_id=booking_id)
                )
            await self._commit(ChangeSet(slots=slots, bookings=bookings))

        logger.info(f"Seeded {len(slots)} slots, {len(bookings)} held")
        return slots

    async def occupy_slot(self, slot_id: str) -> Slot:
        """Mark a reserved slot as occupied."""
        async with self._lock:
            slot = self.get_slot(slot_id)
            if slot.status == SlotStatus.OCCUPIED:
                return slot
            if slot.is_available:
                raise SlotNotReserved(f"Slot {slot.number} has no reservation to occupy")

            slot = replace(slot, status=SlotStatus.OCCUPIED)
            await self._commit(ChangeSet(slots=[slot]))

        logger.info(f"Slot {slot.number} marked occupied")
        return slot

    async def empty_slot(self, slot_id: str) -> Slot:
        """Cancel the slot's active booking, or force it available if it has none."""
        async with self._lock:
            slot = self.get_slot(slot_id)
            booking = next(
                (b for b in self._bookings.values() if b.is_active and b.slot_id == slot_id),
                None,
            )
            if booking is not None:
                await self._finish(booking, BookingStatus.CANCELLED)
            elif not slot.is_available or slot.active_booking_id is not None:
                await self._commit(
                    ChangeSet(
                        slots=[replace(slot, status=SlotStatus.AVAILABLE, active_booking_id=None)]
                    )
                )
            slot = self._slots[slot_id]

        logger.info(f"Emptied slot {slot.number}")
        return slot

    # Bookings

    async def book_slot(self, slot_id: str, customer_name: str, vehicle_number: str) -> Booking:
        """Reserve an available slot for a customer."""
        customer_name = _required(customer_name, "Customer name")
        vehicle_number = _required(vehicle_number, "Vehicle number").upper()

        async with self._lock:
            slot = self.get_slot(slot_id)
            if not slot.is_available:
                logger.warning(f"Refused booking of slot {slot.number}: {slot.status.value}")
                raise SlotNotAvailable(f"Slot {slot.number} is {slot.status.value}")

            booking = Booking(
                id=self._new_id(self._bookings),
                slot_id=slot.id,
                customer_name=customer_name,
                vehicle_number=vehicle_number,
            )
            slot = replace(slot, status=SlotStatus.RESERVED, active_booking_id=booking.id)
            await self._commit(ChangeSet(slots=[slot], bookings=[booking]))

        logger.info(f"Booked slot {slot.number} as {booking.id} for {vehicle_number}")
        return booking

    async def cancel_booking(self, booking_id: str) -> Booking:
        """Void a reservation. No-op on bookings that already ended."""
        async with self._lock:
            return await self._finish(self.get_booking(booking_id), BookingStatus.CANCELLED)

    async def complete_booking(self, booking_id: str) -> Booking:
        """Close a reservation after the vehicle left. No-op on bookings that already ended."""
        async with self._lock:
            return await self._finish(self.get_booking(booking_id), BookingStatus.COMPLETED)

    async def _finish(self, booking: Booking, status: BookingStatus) -> Booking:
        # Caller holds the lock
        if not booking.is_active:
            return booking

        booking = replace(booking, status=status)
        slots = []
        slot = self._slots.get(booking.slot_id)
        if slot is not None and slot.active_booking_id == booking.id:
            slots.append(replace(slot, status=SlotStatus.AVAILABLE, active_booking_id=None))
        await self._commit(ChangeSet(slots=slots, bookings=[booking]))

        logger.info(f"Booking {booking.id} {status.value}")
        return booking

    # Reports

    async def submit_report(self, slot_id: str, reporter_name: str, message: str) -> Report:
        """File an issue against a slot."""
        reporter_name = _required(reporter_name, "Reporter name")
        message = _required(message, "Message")

        async with self._lock:
            slot = self.get_slot(slot_id)
            report = Report(
                id=self._new_id(self._reports),
                slot_id=slot.id,
                slot_number=slot.number,
                reporter_name=reporter_name,
                message=message,
            )
            await self._commit(ChangeSet(reports=[report]))

        logger.info(f"Report {report.id} filed against slot {slot.number}")
        return report

    async def resolve_report(self, report_id: str) -> Report:
        async with self._lock:
            report = self.get_report(report_id)
            if report.status == ReportStatus.RESOLVED:
                return report
            report = replace(report, status=ReportStatus.RESOLVED)
            await self._commit(ChangeSet(reports=[report]))

        logger.info(f"Report {report.id} resolved")
        return report

    # Admin session

    def login(self, username: str, password: str) -> bool:
        """Open the admin session when the credentials match. Never raises."""
        username_ok = secrets.compare_digest(
            (username or "").encode(), self._admin_username.encode()
        )
        password_ok = secrets.compare_digest(
            (password or "").encode(), self._admin_password.encode()
        )
        if not (username_ok and password_ok):
            logger.warning(f"Failed admin login for {username!r}")
            return False

        self.admin_session = AdminSession(username=self._admin_username, authenticated=True)
        logger.info(f"Admin {username} logged in")
        return True

    def logout(self) -> None:
        if self.admin_session is not None:
            logger.info(f"Admin {self.admin_session.username} logged out")
        self.admin_session = None

    @property
    def is_admin(self) -> bool:
        return self.admin_session is not None and self.admin_session.authenticated

    # Queries

    def list_slots(self) -> List[Slot]:
        return sorted(self._slots.values(), key=lambda slot: natural_key(slot.number))

    def list_bookings(self, status: Optional[BookingStatus] = None) -> List[Booking]:
        bookings = sorted(self._bookings.values(), key=lambda b: b.created_at, reverse=True)
        if status is not None:
            bookings = [b for b in bookings if b.status == status]
        return bookings

    def list_reports(self, status: Optional[ReportStatus] = None) -> List[Report]:
        reports = sorted(self._reports.values(), key=lambda r: r.created_at, reverse=True)
        if status is not None:
            reports = [r for r in reports if r.status == status]
        return reports

    def search_slots(self, term: str) -> List[Slot]:
        """Slots whose label or active customer's name contains ``term``."""
        term = (term or "").lower()
        matches = []
        for slot in self.list_slots():
            booking = self._bookings.get(slot.active_booking_id) if slot.active_booking_id else None
            if term in slot.number.lower() or (
                booking is not None and term in booking.customer_name.lower()
            ):
                matches.append(slot)
        return matches

    def search_bookings(self, term: str) -> List[Booking]:
        """Bookings whose customer, vehicle or id contains ``term``."""
        term = (term or "").lower()
        return [
            booking
            for booking in self.list_bookings()
            if term in booking.customer_name.lower()
            or term in booking.vehicle_number.lower()
            or term in booking.id.lower()
        ]

    def occupancy_rate(self) -> float:
        """Percentage of slots that are reserved or occupied."""
        total = len(self._slots)
        if total == 0:
            return 0.0
        held = sum(1 for slot in self._slots.values() if not slot.is_available)
        return held / total * 100

    def stats(self) -> ParkingStats:
        now = utcnow()
        slots = list(self._slots.values())
        return ParkingStats(
            total_slots=len(slots),
            available_slots=sum(1 for s in slots if s.status == SlotStatus.AVAILABLE),
            reserved_slots=sum(1 for s in slots if s.status == SlotStatus.RESERVED),
            occupied_slots=sum(1 for s in slots if s.status == SlotStatus.OCCUPIED),
            active_bookings=sum(1 for b in self._bookings.values() if b.is_active),
            pending_reports=sum(
                1 for r in self._reports.values() if r.status == ReportStatus.PENDING
            ),
            today_bookings=sum(
                1 for b in self._bookings.values() if b.created_at.date() == now.date()
            ),
            occupancy_rate=self.occupancy_rate(),
            timestamp=now,
        )
