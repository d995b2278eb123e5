from sqlalchemy.orm import Session

from dms.models.follow_up import FollowUpNotification
from dms.models.shared import utc_now


class FollowUpRepository:
    def __init__(self, db: Session):
        self.db = db

    def _next_id(self, document_id: int, created_at) -> str:
        millis = int(created_at.timestamp() * 1000)
        while self.db.get(FollowUpNotification, f"follow-up-{document_id}-{millis}"):
            millis += 1
        return f"follow-up-{document_id}-{millis}"

    def create(
        self,
        *,
        document_id: int,
        department: str,
        message: str,
        created_by: str | None,
    ) -> FollowUpNotification:
        created_at = utc_now()
        follow_up = FollowUpNotification(
            id=self._next_id(document_id, created_at),
            document_id=document_id,
            department=department,
            message=message,
            created_by=created_by,
            created_at=created_at,
        )
        self.db.add(follow_up)
        self.db.commit()
        self.db.refresh(follow_up)
        return follow_up

    def get_all(self, department: str | None = None) -> list[FollowUpNotification]:
        query = self.db.query(FollowUpNotification)
        if department is not None:
            query = query.filter(FollowUpNotification.department == department)
        return query.order_by(FollowUpNotification.created_at).all()

    def delete_for_document(self, document_id: int) -> int:
        return (
            self.db.query(FollowUpNotification)
            .filter(FollowUpNotification.document_id == document_id)
            .delete()
        )

    def delete_all(self) -> int:
        return self.db.query(FollowUpNotification).delete()
