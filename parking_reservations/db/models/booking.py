"""SlotBooking model."""

from sqlalchemy import CheckConstraint, Column, DateTime, String

from parking_reservations.db.base import Base


class SlotBooking(Base):
    """Reservation of a slot by a customer."""

    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True)
    # Kept after the slot is removed
    slot_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    vehicle_number = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String(16), nullable=False, default="active")

    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'cancelled', 'completed')", name="check_booking_status"
        ),
    )

    def __repr__(self):
        return f"<SlotBooking(id={self.id}, slot_id={self.slot_id}, status={self.status})>"
