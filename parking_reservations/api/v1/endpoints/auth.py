"""Admin session endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from parking_reservations.api.deps import get_manager
from parking_reservations.core.errors import AuthenticationFailed
from parking_reservations.schemas.auth import AdminSessionResponse, LoginRequest
from parking_reservations.services.parking_manager import ParkingManager

router = APIRouter()


@router.post("/login", response_model=AdminSessionResponse)
async def login(
    credentials: LoginRequest,
    manager: ParkingManager = Depends(get_manager),
):
    """Open the admin session."""
    if not manager.login(credentials.username, credentials.password):
        raise AuthenticationFailed("Invalid username or password")
    return manager.admin_session


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(manager: ParkingManager = Depends(get_manager)):
    """Close the admin session."""
    manager.logout()


@router.get("/session", response_model=Optional[AdminSessionResponse])
async def get_session(manager: ParkingManager = Depends(get_manager)):
    """Get the current admin session, if any."""
    return manager.admin_session
