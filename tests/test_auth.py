"""Tests for the admin session."""

import pytest

from parking_reservations.services.parking_manager import ParkingManager


@pytest.mark.asyncio
async def test_login_wrong_password(manager: ParkingManager):
    """Test that a wrong password leaves the session closed."""
    assert manager.login("admin", "wrong") is False
    assert manager.admin_session is None
    assert not manager.is_admin


@pytest.mark.asyncio
async def test_login_and_logout(manager: ParkingManager):
    """Test opening and closing the admin session."""
    assert manager.login("admin", "admin123") is True
    assert manager.admin_session.authenticated is True
    assert manager.admin_session.username == "admin"
    assert manager.is_admin

    manager.logout()

    assert manager.admin_session is None


@pytest.mark.asyncio
async def test_failed_login_keeps_open_session(manager: ParkingManager):
    """Test that a failed login does not close an existing session."""
    manager.login("admin", "admin123")

    assert manager.login("intruder", "admin123") is False
    assert manager.is_admin


@pytest.mark.asyncio
async def test_login_with_missing_values(manager: ParkingManager):
    """Test that missing credentials fail without raising."""
    assert manager.login(None, None) is False
    assert manager.login("", "") is False


@pytest.mark.asyncio
async def test_logout_without_session(manager: ParkingManager):
    """Test that logout always succeeds."""
    manager.logout()
    manager.logout()

    assert manager.admin_session is None
