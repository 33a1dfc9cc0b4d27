"""Statistics endpoints."""

from fastapi import APIRouter, Depends

from parking_reservations.api.deps import get_manager
from parking_reservations.schemas.stats import ParkingStatsResponse
from parking_reservations.services.parking_manager import ParkingManager

router = APIRouter()


@router.get("/", response_model=ParkingStatsResponse)
async def get_stats(manager: ParkingManager = Depends(get_manager)):
    """Get current occupancy statistics."""
    return manager.stats()
