"""Report schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from parking_reservations.core.domain import ReportStatus


class ReportCreate(BaseModel):
    """Schema for reporting an issue with a slot."""

    slot_id: str
    reporter_name: str = Field(..., max_length=255)
    message: str


class ReportResponse(BaseModel):
    """Schema for report response."""

    id: str
    slot_id: str
    slot_number: str
    reporter_name: str
    message: str
    created_at: datetime
    status: ReportStatus

    model_config = {"from_attributes": True}
