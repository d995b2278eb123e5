"""Document creation and administration."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from dms.core.exceptions import PermissionDeniedError, ValidationError
from dms.models.document import Document, DocumentCategory
from dms.models.user import User, UserRole
from dms.repositories.document_repository import DocumentRepository
from dms.repositories.follow_up_repository import FollowUpRepository
from dms.schemas.document import DocumentCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "sender", "recipient", "department", "document_type")


class DocumentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = DocumentRepository(db)
        self.follow_up_repo = FollowUpRepository(db)

    def list_documents(self, order_by: str | None = None) -> list[Document]:
        return self.repo.get_all(order_by=order_by)

    def list_by_category(self, category: DocumentCategory) -> list[Document]:
        return self.repo.list_by_category(category)

    def create_document(self, data: DocumentCreate, acting_user: str | None) -> Document:
        """Create a queued document awaiting confirmation.

        Raises:
            ValidationError: If a required field is blank.
        """
        for name in REQUIRED_FIELDS:
            if not getattr(data, name).strip():
                raise ValidationError(f"Field '{name}' is required", field=name)
        document = self.repo.create(data, created_by_user=acting_user)
        logger.info(
            "Document %s '%s' created by %s for %s",
            document.id,
            document.title,
            acting_user,
            document.department,
        )
        return document

    def delete_document(self, document_id: int) -> int:
        """Delete a document together with its follow-up reminders."""
        self.follow_up_repo.delete_for_document(document_id)
        count = self.repo.delete(document_id)
        if count:
            logger.info("Document %s deleted", document_id)
        return count

    def clear_documents(self, acting_user: User) -> int:
        """Delete every document. Administrators only."""
        if acting_user.role != UserRole.ADMIN.value:
            raise PermissionDeniedError("Only administrators can clear all documents")
        self.follow_up_repo.delete_all()
        count = self.repo.delete_all()
        logger.warning("All documents cleared by %s (%d deleted)", acting_user.username, count)
        return count
