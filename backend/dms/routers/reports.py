"""Reporting endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dms.core.auth import get_current_user
from dms.core.database import get_db
from dms.core.exceptions import PermissionDeniedError
from dms.models.user import User
from dms.schemas.report import CategoryStatsResponse, ReportSummaryResponse
from dms.services.report_service import ReportService

router = APIRouter()


@router.get(
    "/stats",
    response_model=CategoryStatsResponse,
    summary="Document counts per category",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CategoryStatsResponse:
    return ReportService(db).stats()


@router.get(
    "/summary",
    response_model=ReportSummaryResponse,
    summary="Report summary",
    responses={
        400: {"description": "date_from is after date_to"},
        401: {"description": "Missing or unknown X-Username header"},
        403: {"description": "Administrators and department heads only"},
    },
)
async def get_summary(
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReportSummaryResponse:
    """Aggregate document, user and activity statistics for a date range."""
    if date_from and date_to and date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from must not be after date_to")
    try:
        return ReportService(db).summary(current_user, date_from=date_from, date_to=date_to)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None
