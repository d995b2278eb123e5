from dms.repositories.document_repository import DocumentRepository
from dms.repositories.follow_up_repository import FollowUpRepository
from dms.repositories.user_repository import UserRepository

__all__ = [
    "DocumentRepository",
    "FollowUpRepository",
    "UserRepository",
]
