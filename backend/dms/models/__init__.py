from dms.models.document import COMPLETED_STATUSES, Document, DocumentCategory, DocumentStatus
from dms.models.follow_up import FollowUpNotification
from dms.models.user import User, UserRole

__all__ = [
    "COMPLETED_STATUSES",
    "Document",
    "DocumentCategory",
    "DocumentStatus",
    "FollowUpNotification",
    "User",
    "UserRole",
]
