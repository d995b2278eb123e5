from typing import Any

from sqlalchemy.orm import Session

from dms.core.sorting import apply_order_by
from dms.models.shared import utc_now
from dms.models.user import User
from dms.schemas.user import UserCreate


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, order_by: str | None = None) -> list[User]:
        query = apply_order_by(
            self.db.query(User), User, order_by, default_field="id", default_direction="asc"
        )
        return query.all()

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_credentials(self, username: str, password: str) -> User | None:
        return (
            self.db.query(User)
            .filter(User.username == username, User.password == password)
            .first()
        )

    def username_exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def create(self, data: UserCreate, created_by: str | None) -> User:
        user = User(
            username=data.username,
            password=data.password,
            role=data.role.value,
            department=data.department or None,
            created_at=utc_now(),
            created_by=created_by,
            preferences={},
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_password(self, user_id: int, password: str) -> int:
        count = (
            self.db.query(User)
            .filter(User.id == user_id)
            .update({"password": password}, synchronize_session="fetch")
        )
        self.db.commit()
        return count

    def delete(self, user_id: int) -> int:
        count = self.db.query(User).filter(User.id == user_id).delete()
        self.db.commit()
        return count

    def get_preferences(self, username: str) -> dict[str, Any] | None:
        user = self.get_by_username(username)
        if user is None:
            return None
        return dict(user.preferences or {})

    def set_preferences(self, username: str, preferences: dict[str, Any]) -> int:
        count = (
            self.db.query(User)
            .filter(User.username == username)
            .update({"preferences": preferences}, synchronize_session="fetch")
        )
        self.db.commit()
        return count
