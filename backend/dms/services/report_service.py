"""Category statistics and the downloadable report summary."""

from __future__ import annotations

from collections import Counter
from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy.orm import Session

from dms.core.exceptions import PermissionDeniedError
from dms.models.document import DocumentStatus
from dms.models.shared import as_utc, utc_now
from dms.models.user import User, UserRole
from dms.repositories.document_repository import DocumentRepository
from dms.repositories.user_repository import UserRepository
from dms.schemas.document import DocumentResponse
from dms.schemas.report import (
    CategoryStatsResponse,
    DocumentTotals,
    LabelCount,
    RecentActivity,
    ReportSummaryResponse,
    StatusBreakdown,
    UserStatistics,
)
from dms.services.notification_service import NotificationService
from dms.services.view_projector import load_snapshot
from dms.services.visibility import visibility_scope


def _dated(document: DocumentResponse) -> datetime | None:
    value = document.date_sent or document.date_received
    return as_utc(value) if value is not None else None


def in_range(
    document: DocumentResponse, date_from: date | None, date_to: date | None
) -> bool:
    """Inclusive date range check on the sent date; both bounds optional."""
    if date_from is None and date_to is None:
        return True
    dated = _dated(document)
    if dated is None:
        return False
    if date_from is not None and dated < datetime.combine(date_from, time.min, tzinfo=UTC):
        return False
    if date_to is not None and dated > datetime.combine(date_to, time.max, tzinfo=UTC):
        return False
    return True


def _label_counts(values) -> list[LabelCount]:
    counter = Counter(v for v in values if v)
    return [LabelCount(label=label, count=counter[label]) for label in sorted(counter)]


class ReportService:
    def __init__(self, db: Session):
        self.db = db
        self.document_repo = DocumentRepository(db)
        self.user_repo = UserRepository(db)

    def stats(self) -> CategoryStatsResponse:
        counts = self.document_repo.count_by_category()
        return CategoryStatsResponse(
            queue=counts["queue"],
            received=counts["received"],
            archived=counts["archived"],
            total=sum(counts.values()),
        )

    def summary(
        self,
        viewer: User,
        date_from: date | None = None,
        date_to: date | None = None,
        now: datetime | None = None,
    ) -> ReportSummaryResponse:
        """Aggregate documents and users for a report.

        Administrators report over every department; Department Heads over
        documents addressed to their own department.

        Raises:
            PermissionDeniedError: If the viewer's role may not view reports.
        """
        scope = visibility_scope(viewer.role, viewer.department)
        if not scope.can_view_reports:
            raise PermissionDeniedError(
                "Reports are available to administrators and department heads"
            )

        snapshot = load_snapshot(self.db)

        def _select(documents: list[DocumentResponse]) -> list[DocumentResponse]:
            return [
                d
                for d in documents
                if in_range(d, date_from, date_to)
                and (scope.is_admin or d.department == scope.department)
            ]

        queue = _select(snapshot.queue)
        received = _select(snapshot.received)
        archived = _select(snapshot.archived)
        everything = queue + received + archived

        def _with_status(documents, status: DocumentStatus) -> int:
            return sum(1 for d in documents if d.status == status)

        waiting = _with_status(queue, DocumentStatus.WAITING_FOR_CONFIRMATION)
        awaiting = _with_status(received, DocumentStatus.SENT)

        users = self.user_repo.get_all()
        if not scope.is_admin:
            users = [u for u in users if u.department == scope.department]
        roles = Counter(u.role for u in users)

        now = as_utc(now) if now is not None else utc_now()
        today = now.date()
        week_ago = datetime.combine(today - timedelta(days=7), time.min, tzinfo=UTC)
        month_ago = datetime.combine(today - timedelta(days=30), time.min, tzinfo=UTC)
        sent_dates = [d for d in (_dated(doc) for doc in everything) if d is not None]

        return ReportSummaryResponse(
            date_from=date_from,
            date_to=date_to,
            department=None if scope.is_admin else scope.department,
            documents=DocumentTotals(
                total=len(everything),
                sent=len(received) + len(archived),
                received=_with_status(archived, DocumentStatus.RECEIVED),
                pending=waiting + awaiting,
            ),
            status_breakdown=StatusBreakdown(
                in_queue=waiting,
                sent_awaiting_response=awaiting + _with_status(archived, DocumentStatus.SENT),
                received=_with_status(archived, DocumentStatus.RECEIVED),
                not_received=_with_status(archived, DocumentStatus.NOT_RECEIVED),
                not_sent=_with_status(archived, DocumentStatus.NOT_SENT),
            ),
            by_department=(
                _label_counts(d.department for d in everything) if scope.is_admin else None
            ),
            by_type=_label_counts(d.document_type for d in everything),
            users=UserStatistics(
                total=len(users),
                administrators=roles[UserRole.ADMIN.value],
                department_heads=roles[UserRole.DEPARTMENT_HEAD.value],
                staff=roles[UserRole.STAFF.value],
                working_students=roles[UserRole.WORKING_STUDENT.value],
            ),
            users_by_department=(
                _label_counts(u.department for u in users) if scope.is_admin else None
            ),
            recent_activity=RecentActivity(
                today=sum(1 for d in sent_dates if d.date() == today),
                this_week=sum(1 for d in sent_dates if d >= week_ago),
                this_month=sum(1 for d in sent_dates if d >= month_ago),
            ),
            unread_notifications=NotificationService(self.db).unread_count(viewer),
        )
