"""Report endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from parking_reservations.api.deps import get_manager, require_admin
from parking_reservations.core.domain import ReportStatus
from parking_reservations.schemas.report import ReportCreate, ReportResponse
from parking_reservations.services.parking_manager import ParkingManager

router = APIRouter()


@router.get("/", response_model=List[ReportResponse])
async def list_reports(
    status_filter: Optional[ReportStatus] = Query(
        None, alias="status", description="Filter by status (pending/resolved)"
    ),
    manager: ParkingManager = Depends(get_manager),
):
    """List reports, newest first."""
    return manager.list_reports(status_filter)


@router.post("/", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    report_data: ReportCreate,
    manager: ParkingManager = Depends(get_manager),
):
    """Report an issue with a slot."""
    return await manager.submit_report(
        report_data.slot_id,
        report_data.reporter_name,
        report_data.message,
    )


@router.post(
    "/{report_id}/resolve",
    response_model=ReportResponse,
    dependencies=[Depends(require_admin)],
)
async def resolve_report(
    report_id: str,
    manager: ParkingManager = Depends(get_manager),
):
    """Mark a report as resolved."""
    return await manager.resolve_report(report_id)
