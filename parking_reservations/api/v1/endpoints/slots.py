"""Slot endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from parking_reservations.api.deps import get_manager, require_admin
from parking_reservations.core.domain import SlotStatus
from parking_reservations.schemas.slot import SlotCreate, SlotResponse, SlotSeed
from parking_reservations.services.parking_manager import ParkingManager

router = APIRouter()


@router.get("/", response_model=List[SlotResponse])
async def list_slots(
    search: Optional[str] = Query(None, description="Match slot number or customer name"),
    manager: ParkingManager = Depends(get_manager),
):
    """List all slots, optionally filtered by a search term."""
    if search:
        return manager.search_slots(search)
    return manager.list_slots()


@router.post(
    "/",
    response_model=SlotResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_slot(
    slot_data: SlotCreate,
    manager: ParkingManager = Depends(get_manager),
):
    """Create a new slot."""
    return await manager.create_slot(slot_data.number)


@router.post(
    "/reset",
    response_model=List[SlotResponse],
    dependencies=[Depends(require_admin)],
)
async def reset_slots(manager: ParkingManager = Depends(get_manager)):
    """Cancel all active bookings and free every slot."""
    await manager.reset_all_slots()
    return manager.list_slots()


@router.post(
    "/seed",
    response_model=List[SlotResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def seed_slots(
    seed: SlotSeed,
    manager: ParkingManager = Depends(get_manager),
):
    """Add a deterministic demo inventory."""
    distribution = {SlotStatus.RESERVED: seed.reserved, SlotStatus.OCCUPIED: seed.occupied}
    return await manager.seed_slots(seed.count, distribution, seed.row_width)


@router.get("/{slot_id}", response_model=SlotResponse)
async def get_slot(
    slot_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Get a specific slot by ID."""
    return manager.get_slot(slot_id)


@router.delete(
    "/{slot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_slot(
    slot_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Delete an available slot."""
    await manager.remove_slot(slot_id)


@router.post(
    "/{slot_id}/empty",
    response_model=SlotResponse,
    dependencies=[Depends(require_admin)],
)
async def empty_slot(
    slot_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Cancel the slot's booking and make it available."""
    return await manager.empty_slot(slot_id)


@router.post(
    "/{slot_id}/occupy",
    response_model=SlotResponse,
    dependencies=[Depends(require_admin)],
)
async def occupy_slot(
    slot_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Mark a reserved slot as occupied."""
    return await manager.occupy_slot(slot_id)
