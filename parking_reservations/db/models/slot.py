"""ParkingSlot model."""

from sqlalchemy import CheckConstraint, Column, DateTime, String

from parking_reservations.db.base import Base


class ParkingSlot(Base):
    """A labelled parking space and its current hold."""

    __tablename__ = "parking_slots"

    id = Column(String(64), primary_key=True)
    number = Column(String(64), nullable=False, unique=True)
    status = Column(String(16), nullable=False, default="available")
    # Booking currently holding the slot; no FK so booking history can outlive slots
    active_booking_id = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('available', 'reserved', 'occupied')", name="check_slot_status"),
    )

    def __repr__(self):
        return f"<ParkingSlot(id={self.id}, number={self.number}, status={self.status})>"
