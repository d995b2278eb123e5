"""Per-user notification feed synthesized from documents and follow-ups."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from dms.core.exceptions import NotFoundError
from dms.models.document import DocumentStatus
from dms.models.follow_up import FollowUpNotification
from dms.models.shared import as_utc
from dms.models.user import User
from dms.repositories.document_repository import DocumentRepository
from dms.repositories.follow_up_repository import FollowUpRepository
from dms.repositories.user_repository import UserRepository
from dms.schemas.notification import (
    NotificationFeedResponse,
    NotificationResponse,
    NotificationType,
    Section,
    SectionBadges,
)
from dms.schemas.preferences import UserPreferences
from dms.schemas.view import SectionCountsResponse
from dms.services.view_projector import DocumentSnapshot, ViewProjector, load_snapshot
from dms.services.visibility import VisibilityScope, visibility_scope

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=UTC)


def _listed_at(document) -> datetime | None:
    value = document.date_received or document.date_sent
    return as_utc(value) if value is not None else None


def _completion_notice(document) -> tuple[NotificationType, str] | None:
    if document.status == DocumentStatus.RECEIVED:
        return (
            NotificationType.RECEIVED_CONFIRMATION,
            f'Document received: "{document.title}" was received by {document.recipient}',
        )
    if document.status == DocumentStatus.NOT_RECEIVED:
        return (
            NotificationType.NOT_RECEIVED,
            f'Document not received: "{document.title}" was not received by {document.recipient}',
        )
    return None


def _document_notices(
    snapshot: DocumentSnapshot, scope: VisibilityScope
) -> Iterable[tuple[NotificationType, int, str, datetime | None]]:
    for doc in snapshot.received:
        if not scope.sees_as_recipient(doc):
            continue
        if doc.status == DocumentStatus.SENT:
            yield (
                NotificationType.RECEIVED,
                doc.id,
                f'New document received: "{doc.title}" from {doc.sender}',
                _listed_at(doc),
            )
        elif doc.status == DocumentStatus.NOT_SENT:
            yield (
                NotificationType.CANCELLED,
                doc.id,
                f'Document cancelled: "{doc.title}" was not sent',
                _listed_at(doc),
            )

    for doc in snapshot.received:
        if not scope.sees_as_sender(doc):
            continue
        if doc.status == DocumentStatus.SENT:
            sent_at = as_utc(doc.date_sent) if doc.date_sent else None
            yield (
                NotificationType.SENT,
                doc.id,
                f'Document "{doc.title}" sent and awaiting response',
                sent_at,
            )
            continue
        notice = _completion_notice(doc)
        if notice:
            yield notice[0], doc.id, notice[1], _listed_at(doc)

    for doc in snapshot.archived:
        if not scope.sees_as_sender(doc):
            continue
        notice = _completion_notice(doc)
        if notice:
            yield notice[0], doc.id, notice[1], _listed_at(doc)


def synthesize(
    snapshot: DocumentSnapshot,
    scope: VisibilityScope,
    follow_ups: Iterable[FollowUpNotification],
    preferences: UserPreferences,
) -> list[NotificationResponse]:
    """Build the notification feed for one viewer.

    The result depends only on its inputs: ids are derived from the document
    id and kind, so repeated calls yield the same feed. Newest first; equal
    timestamps fall back to the numeric document id. Follow-ups for documents
    absent from the snapshot are dropped.
    """
    read_ids = set(preferences.read_notification_ids)
    cleared_ids = set(preferences.cleared_notification_ids)
    feed: dict[str, NotificationResponse] = {}

    for kind, document_id, message, timestamp in _document_notices(snapshot, scope):
        notification_id = f"{kind.value}-{document_id}"
        if notification_id in feed:
            continue
        feed[notification_id] = NotificationResponse(
            id=notification_id,
            message=message,
            timestamp=timestamp,
            type=kind,
            read=notification_id in read_ids,
            cleared=notification_id in cleared_ids,
            document_id=document_id,
        )

    known_ids = {d.id for d in snapshot.queue + snapshot.received + snapshot.archived}
    for follow_up in follow_ups:
        if follow_up.document_id not in known_ids:
            continue
        if not scope.sees_follow_up(follow_up.department) or follow_up.id in feed:
            continue
        feed[follow_up.id] = NotificationResponse(
            id=follow_up.id,
            message=follow_up.message,
            timestamp=as_utc(follow_up.created_at),
            type=NotificationType.FOLLOW_UP,
            read=follow_up.id in read_ids,
            cleared=follow_up.id in cleared_ids,
            department=follow_up.department,
            document_id=follow_up.document_id,
        )

    return sorted(
        feed.values(),
        key=lambda n: (n.timestamp or _EARLIEST, n.document_id or 0, n.id),
        reverse=True,
    )


def compute_badges(
    counts: SectionCountsResponse,
    notifications: list[NotificationResponse],
    preferences: UserPreferences,
) -> SectionBadges:
    """Badge per section; a section flagged as cleared shows zero."""
    unread = sum(1 for n in notifications if not n.read and not n.cleared)
    return SectionBadges(
        queue=0 if preferences.queue else counts.outgoing,
        received=0 if preferences.received else counts.inbox,
        archive=0 if preferences.archive else counts.history,
        notifications=0 if preferences.notifications else unread,
    )


def rearm(
    notifications: list[NotificationResponse], preferences: UserPreferences
) -> bool:
    """Reset the cleared notifications flag when something unread exists.

    Returns True when ``preferences`` was changed.
    """
    if preferences.notifications and any(not n.read for n in notifications):
        preferences.notifications = False
        return True
    return False


def _add_ids(existing: list[str], ids: Iterable[str]) -> list[str]:
    merged = list(existing)
    seen = set(existing)
    for item in ids:
        if item not in seen:
            merged.append(item)
            seen.add(item)
    return merged


class NotificationService:
    """Loads, re-arms and updates the notification state of a user."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.follow_up_repo = FollowUpRepository(db)

    def _preferences(self, user: User) -> UserPreferences:
        return UserPreferences.model_validate(user.preferences or {})

    def _save(self, user: User, preferences: UserPreferences) -> None:
        self.user_repo.set_preferences(user.username, preferences.to_storage())

    def _notifications(
        self, user: User, preferences: UserPreferences
    ) -> tuple[list[NotificationResponse], ViewProjector]:
        scope = visibility_scope(user.role, user.department)
        projector = ViewProjector(load_snapshot(self.db), scope)
        follow_ups = self.follow_up_repo.get_all()
        return synthesize(projector.snapshot, scope, follow_ups, preferences), projector

    def feed(self, user: User) -> NotificationFeedResponse:
        """Synthesize the feed and badges, persisting a re-armed flag."""
        preferences = self._preferences(user)
        notifications, projector = self._notifications(user, preferences)
        if rearm(notifications, preferences):
            logger.info("Re-armed notifications badge for %s", user.username)
            self._save(user, preferences)
        return NotificationFeedResponse(
            notifications=notifications,
            unread_count=sum(1 for n in notifications if not n.read),
            badges=compute_badges(projector.counts(), notifications, preferences),
        )

    def mark_read(self, user: User, notification_id: str) -> UserPreferences:
        preferences = self._preferences(user)
        preferences.read_notification_ids = _add_ids(
            preferences.read_notification_ids, [notification_id]
        )
        self._save(user, preferences)
        return preferences

    def mark_all_read(self, user: User) -> UserPreferences:
        preferences = self._preferences(user)
        notifications, _ = self._notifications(user, preferences)
        preferences.read_notification_ids = _add_ids(
            preferences.read_notification_ids, (n.id for n in notifications)
        )
        preferences.notifications = True
        self._save(user, preferences)
        return preferences

    def clear_all(self, user: User) -> UserPreferences:
        """Mark every current notification read and cleared."""
        preferences = self._preferences(user)
        notifications, _ = self._notifications(user, preferences)
        ids = [n.id for n in notifications]
        preferences.read_notification_ids = _add_ids(preferences.read_notification_ids, ids)
        preferences.cleared_notification_ids = _add_ids(
            preferences.cleared_notification_ids, ids
        )
        preferences.notifications = True
        self._save(user, preferences)
        logger.info("Cleared %d notifications for %s", len(ids), user.username)
        return preferences

    def clear_section(self, user: User, section: Section) -> UserPreferences:
        """Flag a section badge as seen. Opening notifications reads them all."""
        if section == "notifications":
            return self.mark_all_read(user)
        preferences = self._preferences(user)
        setattr(preferences, section, True)
        self._save(user, preferences)
        return preferences

    def add_follow_up(self, document_id: int, acting_user: str | None) -> FollowUpNotification:
        """Record an "Action Needed" reminder for the document's department."""
        document = DocumentRepository(self.db).get_by_id(document_id)
        if document is None:
            raise NotFoundError(f"Document {document_id} not found")
        follow_up = self.follow_up_repo.create(
            document_id=document.id,
            department=document.department,
            message=f"Action Needed: {document.title}",
            created_by=acting_user,
        )
        logger.info(
            "Follow-up %s added for document %s by %s", follow_up.id, document_id, acting_user
        )
        return follow_up

    def unread_count(self, user: User) -> int:
        """Number of unread notifications, without touching stored state."""
        notifications, _ = self._notifications(user, self._preferences(user))
        return sum(1 for n in notifications if not n.read)
