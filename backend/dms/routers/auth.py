"""Login endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dms.core.database import get_db
from dms.schemas.user import LoginRequest, LoginResponse
from dms.services.user_service import UserService

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
)
async def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
) -> LoginResponse:
    """Check a username and password pair.

    A mismatch is reported in the body with ``success: false``.
    """
    return UserService(db).login(data.username, data.password)
