"""User accounts, login and per-user preferences."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dms.core.config import settings
from dms.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ProtectedResourceError,
    ValidationError,
)
from dms.models.user import User, UserRole
from dms.repositories.user_repository import UserRepository
from dms.schemas.preferences import UserPreferences
from dms.schemas.user import LoginResponse, UserCreate, UserResponse

logger = logging.getLogger(__name__)

# Roles a Department Head may hand out, always within their own department.
DEPARTMENT_HEAD_ASSIGNABLE_ROLES = frozenset(
    {UserRole.STAFF.value, UserRole.WORKING_STUDENT.value}
)


def check_password(password: str) -> None:
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters",
            field="password",
        )


class UserService:
    """Service for account management and preference storage."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def seed_admin(self) -> User:
        """Create the built-in administrator if it does not exist yet."""
        admin = self.repo.get_by_username(settings.ADMIN_USERNAME)
        if admin is not None:
            return admin
        admin = self.repo.create(
            UserCreate(
                username=settings.ADMIN_USERNAME,
                password=settings.ADMIN_PASSWORD,
                role=UserRole.ADMIN,
                department=None,
            ),
            created_by="system",
        )
        logger.info("Seeded administrator account '%s'", admin.username)
        return admin

    def login(self, username: str, password: str) -> LoginResponse:
        user = self.repo.get_by_credentials(username, password)
        if user is None:
            logger.info("Failed login for '%s'", username)
            return LoginResponse(success=False, message="Invalid username or password")
        logger.info("User '%s' logged in", username)
        return LoginResponse(success=True, user=UserResponse.model_validate(user))

    def list_users(self, order_by: str | None = None) -> list[User]:
        return self.repo.get_all(order_by=order_by)

    def create_user(self, data: UserCreate, acting_user: User) -> User:
        """Create an account on behalf of ``acting_user``.

        Raises:
            PermissionDeniedError: If the actor's role may not create this user.
            ValidationError: If the password is too short.
            ConflictError: If the username is taken.
        """
        role = acting_user.role
        if role == UserRole.DEPARTMENT_HEAD.value:
            if data.role.value not in DEPARTMENT_HEAD_ASSIGNABLE_ROLES:
                raise PermissionDeniedError(
                    "Department Heads can only create Staff or Working Student accounts"
                )
            if data.department != acting_user.department:
                raise PermissionDeniedError(
                    "Department Heads can only create users in their own department"
                )
        elif role != UserRole.ADMIN.value:
            raise PermissionDeniedError("Only administrators and department heads can create users")

        check_password(data.password)
        if self.repo.username_exists(data.username):
            raise ConflictError(f"Username '{data.username}' already exists")

        try:
            user = self.repo.create(data, created_by=acting_user.username)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Username '{data.username}' already exists") from e

        logger.info(
            "User '%s' (%s) created by %s", user.username, user.role, acting_user.username
        )
        return user

    def change_password(self, user_id: int, password: str) -> int:
        check_password(password)
        count = self.repo.update_password(user_id, password)
        if count:
            logger.info("Password changed for user %s", user_id)
        return count

    def delete_user(self, user_id: int) -> int:
        user = self.repo.get_by_id(user_id)
        if user is None:
            return 0
        if user.username == settings.ADMIN_USERNAME:
            raise ProtectedResourceError("Cannot delete admin user")
        count = self.repo.delete(user_id)
        logger.info("User '%s' deleted", user.username)
        return count

    def get_preferences(self, username: str) -> UserPreferences:
        stored = self.repo.get_preferences(username)
        if stored is None:
            raise NotFoundError(f"User '{username}' not found")
        return UserPreferences.model_validate(stored)

    def set_preferences(self, username: str, payload: Any) -> UserPreferences:
        """Replace the stored preferences; last write wins."""
        if not isinstance(payload, dict):
            raise ValidationError("Preferences must be an object", field="preferences")
        try:
            preferences = UserPreferences.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid preferences: {e}", field="preferences") from e
        if not self.repo.set_preferences(username, preferences.to_storage()):
            raise NotFoundError(f"User '{username}' not found")
        return preferences
