"""Follow-up reminders raised manually against a document."""

from sqlalchemy import Column, DateTime, Integer, String

from dms.core.database import Base
from dms.models.shared import utc_now


class FollowUpNotification(Base):
    __tablename__ = "follow_up_notifications"

    # follow-up-<document id>-<epoch millis>
    id = Column(String(80), primary_key=True)
    document_id = Column(Integer, nullable=False, index=True)
    department = Column(String(100), nullable=False, index=True)
    message = Column(String(500), nullable=False)
    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
