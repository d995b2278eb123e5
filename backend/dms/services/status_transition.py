"""Status transition engine: classify, recategorize and stamp a document."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dms.core.exceptions import StoreError
from dms.models.document import (
    COMPLETED_STATUSES,
    Document,
    DocumentCategory,
    DocumentStatus,
)
from dms.models.shared import utc_now
from dms.repositories.document_repository import DocumentRepository
from dms.services.category_classifier import classify

logger = logging.getLogger(__name__)


def resolve_side(document: Document, requested: bool | None) -> bool:
    """Decide whether a status change is applied from the received side.

    For queue and received documents the stored category is authoritative.
    Archived documents may still be re-marked; the caller's flag picks the
    side, falling back to the side implied by the stored status.
    """
    category = DocumentCategory(document.document_category)
    if category is DocumentCategory.ARCHIVED:
        if requested is not None:
            return requested
        return document.status in COMPLETED_STATUSES

    stored_side = category is DocumentCategory.RECEIVED
    if requested is not None and requested != stored_side:
        logger.warning(
            "Ignoring %s-side flag for document %s stored in '%s'",
            "received" if requested else "queue",
            document.id,
            category.value,
        )
    return stored_side


class StatusTransitionService:
    """Applies status changes and keeps ``document_category`` consistent."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DocumentRepository(db)

    def update_status(
        self,
        document_id: int,
        new_status: DocumentStatus | str,
        acting_user: str | None,
        is_received_side: bool | None = None,
    ) -> int:
        """Set the status of a document and move it to its new category.

        Returns the number of affected rows; ``0`` means the document does not
        exist. Status and category are written in a single UPDATE statement.
        """
        status = DocumentStatus(new_status)
        try:
            document = self.repo.get_by_id(document_id)
            if document is None:
                logger.info("Status update for missing document %s", document_id)
                return 0

            if document.document_category == DocumentCategory.ARCHIVED.value:
                logger.info(
                    "Re-marking archived document %s as '%s'", document_id, status.value
                )

            received_side = resolve_side(document, is_received_side)
            side_category = (
                DocumentCategory.RECEIVED if received_side else DocumentCategory.QUEUE
            )
            new_category = classify(side_category, received_side, status)

            count = self.repo.update_status(
                document_id,
                status=status.value,
                category=new_category.value,
                updated_by=acting_user,
                updated_at=utc_now(),
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to update status of document %s", document_id)
            raise StoreError(f"Failed to update document {document_id}") from e

        logger.info(
            "Document %s set to '%s' (%s) by %s",
            document_id,
            status.value,
            new_category.value,
            acting_user,
        )
        return count
