"""Notification API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dms.core.auth import get_current_user
from dms.core.database import get_db
from dms.models.user import User
from dms.schemas.notification import NotificationFeedResponse, Section
from dms.schemas.preferences import PreferencesEnvelope
from dms.services.notification_service import NotificationService

router = APIRouter()


@router.get(
    "/",
    response_model=NotificationFeedResponse,
    summary="Notification feed",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationFeedResponse:
    """Synthesize the acting user's notifications and section badges."""
    return NotificationService(db).feed(current_user)


@router.post(
    "/read_all",
    response_model=PreferencesEnvelope,
    response_model_by_alias=True,
    summary="Mark all notifications as read",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PreferencesEnvelope:
    preferences = NotificationService(db).mark_all_read(current_user)
    return PreferencesEnvelope(preferences=preferences)


@router.post(
    "/clear_all",
    response_model=PreferencesEnvelope,
    response_model_by_alias=True,
    summary="Clear all notifications",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def clear_all(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PreferencesEnvelope:
    """Mark every current notification as read and cleared."""
    preferences = NotificationService(db).clear_all(current_user)
    return PreferencesEnvelope(preferences=preferences)


@router.post(
    "/sections/{section}/clear",
    response_model=PreferencesEnvelope,
    response_model_by_alias=True,
    summary="Clear a section badge",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def clear_section(
    section: Section,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PreferencesEnvelope:
    """Flag a section as seen so its badge shows zero."""
    preferences = NotificationService(db).clear_section(current_user, section)
    return PreferencesEnvelope(preferences=preferences)


@router.post(
    "/{notification_id}/read",
    response_model=PreferencesEnvelope,
    response_model_by_alias=True,
    summary="Mark a notification as read",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def mark_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PreferencesEnvelope:
    preferences = NotificationService(db).mark_read(current_user, notification_id)
    return PreferencesEnvelope(preferences=preferences)
