from enum import Enum

from sqlalchemy import JSON, Column, DateTime, Integer, String

from dms.core.database import Base
from dms.models.shared import utc_now


class UserRole(str, Enum):
    ADMIN = "Admin"
    DEPARTMENT_HEAD = "Department Head"
    STAFF = "Staff"
    WORKING_STUDENT = "Working Student"


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    # Stored in plaintext; login is a direct comparison.
    password = Column(String(255), nullable=False)
    role = Column(String(30), nullable=False)
    department = Column(String(100), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    created_by = Column(String(50), nullable=True)
    preferences = Column(JSON, nullable=False, default=dict)
