"""Tests for the slot/booking consistency invariant."""

import asyncio
import random

import pytest

from parking_reservations.core.domain import BookingStatus, SlotStatus
from parking_reservations.core.errors import ParkingError, SlotNotAvailable
from parking_reservations.services.parking_manager import ParkingManager


def assert_consistent(manager: ParkingManager):
    """Every held slot has exactly one active booking, and only held slots do."""
    bookings = manager.list_bookings()
    for slot in manager.list_slots():
        active = [b for b in bookings if b.is_active and b.slot_id == slot.id]
        if slot.status == SlotStatus.AVAILABLE:
            assert active == []
            assert slot.active_booking_id is None
        else:
            assert len(active) == 1
            assert slot.active_booking_id == active[0].id


async def random_step(manager: ParkingManager, rng: random.Random, counter: int):
    slots = manager.list_slots()
    bookings = manager.list_bookings()
    action = rng.choice(
        ["create", "remove", "book", "book", "cancel", "complete", "empty", "occupy", "reset"]
    )

    if action == "create" or not slots:
        await manager.create_slot(f"{rng.choice('ABC')}{counter}")
    elif action == "remove":
        await manager.remove_slot(rng.choice(slots).id)
    elif action == "book":
        await manager.book_slot(rng.choice(slots).id, f"Customer {counter}", f"car{counter}")
    elif action in ("cancel", "complete") and bookings:
        booking = rng.choice(bookings)
        if action == "cancel":
            await manager.cancel_booking(booking.id)
        else:
            await manager.complete_booking(booking.id)
    elif action == "empty":
        await manager.empty_slot(rng.choice(slots).id)
    elif action == "occupy":
        await manager.occupy_slot(rng.choice(slots).id)
    elif action == "reset" and rng.random() < 0.2:
        await manager.reset_all_slots()


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", [1, 7, 42])
async def test_random_operations_keep_invariant(manager: ParkingManager, seed):
    """Test the invariant after every step of a random operation sequence."""
    rng = random.Random(seed)
    await manager.seed_slots(6, {SlotStatus.OCCUPIED: 2})

    for counter in range(300):
        try:
            await random_step(manager, rng, counter)
        except ParkingError:
            # Rejected operations must not change anything either
            pass
        assert_consistent(manager)


@pytest.mark.asyncio
async def test_concurrent_bookings_of_one_slot(manager: ParkingManager):
    """Test that only one of many concurrent bookings of a slot succeeds."""
    slot = await manager.create_slot("A1")

    results = await asyncio.gather(
        *(manager.book_slot(slot.id, f"Customer {i}", f"car{i}") for i in range(10)),
        return_exceptions=True,
    )

    successes = [r for r in results if not isinstance(r, Exception)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 1
    assert len(failures) == 9
    assert all(isinstance(f, SlotNotAvailable) for f in failures)
    assert manager.get_slot(slot.id).active_booking_id == successes[0].id
    assert len(manager.list_bookings(BookingStatus.ACTIVE)) == 1
    assert_consistent(manager)


@pytest.mark.asyncio
async def test_concurrent_cancel_and_book(manager: ParkingManager):
    """Test interleaved cancel, rebook and reset calls stay consistent."""
    slots = [await manager.create_slot(f"A{i}") for i in range(1, 4)]
    bookings = [await manager.book_slot(s.id, "Alice", "abc123") for s in slots]

    await asyncio.gather(
        *(manager.cancel_booking(b.id) for b in bookings),
        *(manager.book_slot(s.id, "Bob", "def456") for s in slots),
        manager.reset_all_slots(),
        return_exceptions=True,
    )

    assert_consistent(manager)
