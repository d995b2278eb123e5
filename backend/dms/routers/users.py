"""User account and preference endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dms.core.auth import get_current_user
from dms.core.database import get_db
from dms.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ProtectedResourceError,
    ValidationError,
)
from dms.models.user import User, UserRole
from dms.schemas.document import DocumentChangeResponse
from dms.schemas.preferences import PreferencesEnvelope
from dms.schemas.user import PasswordChange, UserCreate, UserCreateResponse, UserResponse
from dms.services.user_service import UserService

router = APIRouter()


def _require_self_or_admin(username: str, current_user: User) -> None:
    if current_user.username != username and current_user.role != UserRole.ADMIN.value:
        raise HTTPException(status_code=403, detail="Cannot access another user's preferences")


@router.get(
    "/",
    response_model=list[UserResponse],
    summary="List users",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def list_users(
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[User]:
    """List all user accounts; passwords are never returned."""
    return UserService(db).list_users(order_by=order_by)


@router.post(
    "/",
    response_model=UserCreateResponse,
    status_code=201,
    summary="Create user",
    responses={
        400: {"description": "Password too short"},
        401: {"description": "Missing or unknown X-Username header"},
        403: {"description": "Role may not create this account"},
        409: {"description": "Username already exists"},
    },
)
async def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserCreateResponse:
    """Create a user account on behalf of the acting user."""
    try:
        user = UserService(db).create_user(data, current_user)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    return UserCreateResponse(id=user.id, message="User created successfully")


@router.put(
    "/{user_id}/password",
    response_model=DocumentChangeResponse,
    summary="Change password",
    responses={
        400: {"description": "Password too short"},
        401: {"description": "Missing or unknown X-Username header"},
        404: {"description": "User not found"},
    },
)
async def change_password(
    user_id: int,
    data: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DocumentChangeResponse:
    """Replace a user's password."""
    try:
        count = UserService(db).change_password(user_id, data.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    if count == 0:
        raise HTTPException(status_code=404, detail="User not found")
    return DocumentChangeResponse(message="Password updated successfully", changes=count)


@router.delete(
    "/{user_id}",
    response_model=DocumentChangeResponse,
    summary="Delete user",
    responses={
        401: {"description": "Missing or unknown X-Username header"},
        403: {"description": "The admin account cannot be deleted"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DocumentChangeResponse:
    """Delete a user account."""
    try:
        count = UserService(db).delete_user(user_id)
    except ProtectedResourceError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None
    if count == 0:
        raise HTTPException(status_code=404, detail="User not found")
    return DocumentChangeResponse(message="User deleted successfully", changes=count)


@router.get(
    "/{username}/preferences",
    response_model=PreferencesEnvelope,
    response_model_by_alias=True,
    summary="Get user preferences",
    responses={
        401: {"description": "Missing or unknown X-Username header"},
        403: {"description": "Another user's preferences"},
        404: {"description": "User not found"},
    },
)
async def get_preferences(
    username: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PreferencesEnvelope:
    """Return the stored badge flags and read/cleared notification ids."""
    _require_self_or_admin(username, current_user)
    try:
        preferences = UserService(db).get_preferences(username)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return PreferencesEnvelope(preferences=preferences)


@router.put(
    "/{username}/preferences",
    response_model=PreferencesEnvelope,
    response_model_by_alias=True,
    summary="Replace user preferences",
    responses={
        400: {"description": "Preferences must be an object"},
        401: {"description": "Missing or unknown X-Username header"},
        403: {"description": "Another user's preferences"},
        404: {"description": "User not found"},
    },
)
async def set_preferences(
    username: str,
    preferences: Any = Body(default=None, embed=True),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PreferencesEnvelope:
    """Overwrite the stored preferences; the last write wins."""
    _require_self_or_admin(username, current_user)
    try:
        stored = UserService(db).set_preferences(username, preferences)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return PreferencesEnvelope(preferences=stored)
