"""Shared API dependencies."""

from fastapi import Depends, Request

from parking_reservations.core.domain import AdminSession
from parking_reservations.core.errors import AuthenticationFailed
from parking_reservations.services.parking_manager import ParkingManager


def get_manager(request: Request) -> ParkingManager:
    """Return the state manager created at startup."""
    return request.app.state.manager


def require_admin(manager: ParkingManager = Depends(get_manager)) -> AdminSession:
    """Reject the request unless an admin is logged in."""
    if not manager.is_admin:
        raise AuthenticationFailed("Admin authentication required")
    return manager.admin_session
