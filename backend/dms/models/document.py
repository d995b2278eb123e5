from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String, Text, select
from sqlalchemy.orm import column_property

from dms.core.database import Base
from dms.models.user import User


class DocumentStatus(str, Enum):
    WAITING_FOR_CONFIRMATION = "Waiting for Confirmation"
    SENT = "Sent"
    RECEIVED = "Received"
    NOT_RECEIVED = "Not Received"
    NOT_SENT = "Not Sent"


class DocumentCategory(str, Enum):
    QUEUE = "queue"
    RECEIVED = "received"
    ARCHIVED = "archived"


# Statuses that end the recipient-side workflow.
COMPLETED_STATUSES = frozenset({DocumentStatus.RECEIVED.value, DocumentStatus.NOT_RECEIVED.value})


class Document(Base):
    __tablename__ = "documents"
    # Deleted ids are never reused.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    sender = Column(String(255), nullable=False)
    recipient = Column(String(255), nullable=False)
    department = Column(String(100), nullable=False, index=True)
    document_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(
        String(40), nullable=False, default=DocumentStatus.WAITING_FOR_CONFIRMATION.value
    )
    document_category = Column(
        String(20), nullable=False, index=True, default=DocumentCategory.QUEUE.value
    )
    date_sent = Column(DateTime(timezone=True), nullable=True)
    date_received = Column(DateTime(timezone=True), nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=True)
    file_name = Column(String(255), nullable=True)
    created_by_user = Column(String(50), nullable=True, index=True)
    updated_by = Column(String(50), nullable=True)

    # Department of the creating user, joined in on every read.
    sender_department = column_property(
        select(User.department)
        .where(User.username == created_by_user)
        .correlate_except(User)
        .scalar_subquery()
    )
