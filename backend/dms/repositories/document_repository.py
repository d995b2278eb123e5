from datetime import datetime

from sqlalchemy import func as sa_func
from sqlalchemy.orm import Session

from dms.core.sorting import apply_order_by
from dms.models.document import Document, DocumentCategory, DocumentStatus
from dms.models.shared import utc_now
from dms.schemas.document import DocumentCreate


class DocumentRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, order_by: str | None = None) -> list[Document]:
        query = apply_order_by(self.db.query(Document), Document, order_by)
        return query.all()

    def get_by_id(self, document_id: int) -> Document | None:
        return self.db.query(Document).filter(Document.id == document_id).first()

    def list_by_category(self, category: DocumentCategory | str) -> list[Document]:
        value = category.value if isinstance(category, DocumentCategory) else category
        return (
            self.db.query(Document)
            .filter(Document.document_category == value)
            .order_by(Document.id)
            .all()
        )

    def create(self, data: DocumentCreate, created_by_user: str | None) -> Document:
        now = utc_now()
        document = Document(
            **data.model_dump(),
            status=DocumentStatus.WAITING_FOR_CONFIRMATION.value,
            document_category=DocumentCategory.QUEUE.value,
            date_sent=now,
            date_received=now,
            created_by_user=created_by_user,
        )
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        return document

    def update_status(
        self,
        document_id: int,
        *,
        status: str,
        category: str,
        updated_by: str | None,
        updated_at: datetime,
    ) -> int:
        """Write status and category together in one UPDATE; returns affected rows."""
        values: dict[str, object] = {
            "status": status,
            "document_category": category,
            "last_updated": updated_at,
        }
        if updated_by:
            values["updated_by"] = updated_by
        count = (
            self.db.query(Document)
            .filter(Document.id == document_id)
            .update(values, synchronize_session="fetch")
        )
        self.db.commit()
        return count

    def delete(self, document_id: int) -> int:
        count = self.db.query(Document).filter(Document.id == document_id).delete()
        self.db.commit()
        return count

    def delete_all(self) -> int:
        count = self.db.query(Document).delete()
        self.db.commit()
        return count

    def count_by_category(self) -> dict[str, int]:
        rows = (
            self.db.query(Document.document_category, sa_func.count(Document.id))
            .group_by(Document.document_category)
            .all()
        )
        counts = {category.value: 0 for category in DocumentCategory}
        for category, count in rows:
            counts[category] = count
        return counts

    def count(self) -> int:
        return self.db.query(sa_func.count(Document.id)).scalar() or 0
