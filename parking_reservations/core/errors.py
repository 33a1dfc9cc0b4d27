"""Typed failures raised by the parking state manager."""

from fastapi import status


class ParkingError(Exception):
    """Base class for every failure the state manager reports."""

    code = "parking_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(ParkingError):
    code = "invalid_input"
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT


class DuplicateSlot(ParkingError):
    code = "duplicate_slot"
    status_code = status.HTTP_409_CONFLICT


class SlotNotFound(ParkingError):
    code = "slot_not_found"
    status_code = status.HTTP_404_NOT_FOUND


class SlotNotAvailable(ParkingError):
    code = "slot_not_available"
    status_code = status.HTTP_409_CONFLICT


class SlotNotRemovable(ParkingError):
    code = "slot_not_removable"
    status_code = status.HTTP_409_CONFLICT


class SlotNotReserved(ParkingError):
    code = "slot_not_reserved"
    status_code = status.HTTP_409_CONFLICT


class BookingNotFound(ParkingError):
    code = "booking_not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ReportNotFound(ParkingError):
    code = "report_not_found"
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationFailed(ParkingError):
    code = "authentication_failed"
    status_code = status.HTTP_401_UNAUTHORIZED


class PersistenceFailure(ParkingError):
    """The record store rejected a read or write."""

    code = "persistence_failure"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
