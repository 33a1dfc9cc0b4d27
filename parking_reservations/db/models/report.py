"""SlotReport model."""

from sqlalchemy import CheckConstraint, Column, DateTime, String, Text

from parking_reservations.db.base import Base


class SlotReport(Base):
    """Issue reported against a slot."""

    __tablename__ = "reports"

    id = Column(String(32), primary_key=True)
    slot_id = Column(String(64), nullable=False, index=True)
    slot_number = Column(String(64), nullable=False)
    reporter_name = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String(16), nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'resolved')", name="check_report_status"),
    )

    def __repr__(self):
        return f"<SlotReport(id={self.id}, slot_number={self.slot_number}, status={self.status})>"
