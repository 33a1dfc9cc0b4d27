"""API v1 router."""

from fastapi import APIRouter

from parking_reservations.api.v1.endpoints import auth, bookings, reports, slots, stats

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(slots.router, prefix="/slots", tags=["slots"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
