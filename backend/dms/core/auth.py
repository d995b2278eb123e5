from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from dms.core.database import get_db
from dms.models.user import User
from dms.repositories.user_repository import UserRepository


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    """Resolve the acting user from the X-Username header.

    Login issues no token; clients send the username they logged in with on
    every request.
    """
    username = request.headers.get("X-Username")
    if not username:
        raise HTTPException(status_code=401, detail="X-Username header is required")

    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user
