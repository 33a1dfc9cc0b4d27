"""Booking endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from parking_reservations.api.deps import get_manager
from parking_reservations.core.domain import BookingStatus
from parking_reservations.schemas.booking import BookingCreate, BookingResponse
from parking_reservations.services.parking_manager import ParkingManager

router = APIRouter()


@router.get("/", response_model=List[BookingResponse])
async def list_bookings(
    search: Optional[str] = Query(
        None, description="Match customer name, vehicle number or booking ID"
    ),
    status_filter: Optional[BookingStatus] = Query(
        None, alias="status", description="Filter by status (active/cancelled/completed)"
    ),
    manager: ParkingManager = Depends(get_manager),
):
    """List bookings, newest first."""
    bookings = manager.search_bookings(search) if search else manager.list_bookings()
    if status_filter:
        bookings = [b for b in bookings if b.status == status_filter]
    return bookings


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    manager: ParkingManager = Depends(get_manager),
):
    """Book an available slot."""
    return await manager.book_slot(
        booking_data.slot_id,
        booking_data.customer_name,
        booking_data.vehicle_number,
    )


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Get a specific booking by ID."""
    return manager.get_booking(booking_id)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Cancel a booking and free its slot."""
    return await manager.cancel_booking(booking_id)


@router.post("/{booking_id}/complete", response_model=BookingResponse)
async def complete_booking(
    booking_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Complete a booking once the vehicle has left."""
    return await manager.complete_booking(booking_id)
