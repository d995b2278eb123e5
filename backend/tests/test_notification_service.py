"""Tests for notification synthesis, badges and stored notification state."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from dms.core.exceptions import NotFoundError
from dms.models.follow_up import FollowUpNotification
from dms.models.user import User
from dms.schemas.document import DocumentResponse
from dms.schemas.notification import NotificationType
from dms.schemas.preferences import UserPreferences
from dms.schemas.view import SectionCountsResponse
from dms.services.document_service import DocumentService
from dms.services.notification_service import (
    NotificationService,
    compute_badges,
    rearm,
    synthesize,
)
from dms.services.view_projector import DocumentSnapshot
from dms.services.visibility import visibility_scope

T0 = datetime(2025, 5, 1, 9, 0, tzinfo=UTC)


def _doc(id, category, status, *, sender_department="EDP", department="HR", at=T0):
    return DocumentResponse(
        id=id,
        title=f"Doc {id}",
        sender="Alice",
        recipient="Bob",
        department=department,
        document_type="Memo",
        status=status,
        document_category=category,
        date_sent=at,
        date_received=at,
        sender_department=sender_department,
    )


def _follow_up(document_id, department, at=T0):
    return SimpleNamespace(
        id=f"follow-up-{document_id}-{int(at.timestamp() * 1000)}",
        document_id=document_id,
        department=department,
        message=f"Action Needed: Doc {document_id}",
        created_at=at,
    )


@pytest.fixture
def snapshot():
    return DocumentSnapshot(
        received=[
            _doc(1, "received", "Sent", at=T0),
            _doc(2, "received", "Received", at=T0 + timedelta(hours=1)),
        ],
        archived=[
            _doc(3, "archived", "Not Received", at=T0 + timedelta(hours=2)),
            _doc(4, "archived", "Not Sent", at=T0 + timedelta(hours=3)),
        ],
    )


class TestSynthesize:
    def test_sender_side_kinds(self, snapshot):
        feed = synthesize(snapshot, visibility_scope("Staff", "EDP"), [], UserPreferences())
        assert [(n.id, n.type) for n in feed] == [
            ("not-received-3", NotificationType.NOT_RECEIVED),
            ("received-confirmation-2", NotificationType.RECEIVED_CONFIRMATION),
            ("sent-1", NotificationType.SENT),
        ]
        assert feed[2].message == 'Document "Doc 1" sent and awaiting response'

    def test_recipient_side_kinds(self, snapshot):
        feed = synthesize(snapshot, visibility_scope("Staff", "HR"), [], UserPreferences())
        assert [n.id for n in feed] == ["received-1"]
        assert feed[0].message == 'New document received: "Doc 1" from Alice'

    def test_admin_sees_both_sides(self, snapshot):
        feed = synthesize(snapshot, visibility_scope("Admin", None), [], UserPreferences())
        assert {n.id for n in feed} == {
            "received-1",
            "sent-1",
            "received-confirmation-2",
            "not-received-3",
        }

    def test_read_and_cleared_flags(self, snapshot):
        prefs = UserPreferences(
            read_notification_ids=["sent-1"], cleared_notification_ids=["sent-1"]
        )
        feed = synthesize(snapshot, visibility_scope("Staff", "EDP"), [], prefs)
        by_id = {n.id: n for n in feed}
        assert by_id["sent-1"].read and by_id["sent-1"].cleared
        assert not by_id["not-received-3"].read

    def test_follow_ups_filtered_by_department(self, snapshot):
        follow_ups = [
            _follow_up(1, "HR", T0 + timedelta(days=1)),
            _follow_up(5, "Accounting"),
        ]
        feed = synthesize(snapshot, visibility_scope("Staff", "HR"), follow_ups, UserPreferences())
        assert feed[0].type is NotificationType.FOLLOW_UP
        assert feed[0].department == "HR"
        assert feed[0].document_id == 1
        assert len(feed) == 2

    def test_deterministic(self, snapshot):
        scope = visibility_scope("Admin", None)
        first = synthesize(snapshot, scope, [], UserPreferences())
        second = synthesize(snapshot, scope, [], UserPreferences())
        assert first == second

    def test_equal_timestamps_sorted_by_id_desc(self):
        snap = DocumentSnapshot(
            received=[_doc(1, "received", "Sent"), _doc(2, "received", "Sent")]
        )
        feed = synthesize(snap, visibility_scope("Staff", "EDP"), [], UserPreferences())
        assert [n.id for n in feed] == ["sent-2", "sent-1"]

    def test_equal_timestamps_compare_document_ids_numerically(self):
        snap = DocumentSnapshot(
            received=[_doc(9, "received", "Sent"), _doc(10, "received", "Sent")]
        )
        feed = synthesize(snap, visibility_scope("Staff", "EDP"), [], UserPreferences())
        assert [n.id for n in feed] == ["sent-10", "sent-9"]

    def test_follow_up_for_missing_document_dropped(self, snapshot):
        follow_ups = [_follow_up(1, "HR"), _follow_up(42, "HR")]
        feed = synthesize(snapshot, visibility_scope("Staff", "HR"), follow_ups, UserPreferences())
        assert {n.document_id for n in feed if n.type is NotificationType.FOLLOW_UP} == {1}


class TestBadges:
    def test_cleared_section_shows_zero(self, snapshot):
        prefs = UserPreferences(queue=True, read_notification_ids=["sent-1"])
        feed = synthesize(snapshot, visibility_scope("Staff", "EDP"), [], prefs)
        counts = SectionCountsResponse(outgoing=2, inbox=1, history=4)

        badges = compute_badges(counts, feed, prefs)
        assert badges.queue == 0
        assert badges.received == 1
        assert badges.archive == 4
        assert badges.notifications == 2

    def test_rearm_when_unread_exists(self, snapshot):
        feed = synthesize(snapshot, visibility_scope("Staff", "EDP"), [], UserPreferences())
        prefs = UserPreferences(notifications=True)
        assert rearm(feed, prefs) is True
        assert prefs.notifications is False

    def test_no_rearm_when_all_read(self, snapshot):
        prefs = UserPreferences(
            notifications=True,
            read_notification_ids=["sent-1", "received-confirmation-2", "not-received-3"],
        )
        feed = synthesize(snapshot, visibility_scope("Staff", "EDP"), [], prefs)
        assert rearm(feed, prefs) is False
        assert prefs.notifications is True


def _user(db_session, username) -> User:
    db_session.expire_all()
    return db_session.query(User).filter(User.username == username).one()


class TestNotificationService:
    def test_feed_persists_rearmed_flag(self, db_session, make_document):
        make_document(statuses=("Sent",))
        user = _user(db_session, "hr_staff")
        user.preferences = {"notifications": True}
        db_session.commit()

        feed = NotificationService(db_session).feed(user)
        assert feed.unread_count == 1
        assert feed.badges.notifications == 1
        assert feed.badges.received == 1
        assert _user(db_session, "hr_staff").preferences["notifications"] is False

    def test_mark_read(self, db_session, make_document):
        doc = make_document(statuses=("Sent",))
        service = NotificationService(db_session)
        service.mark_read(_user(db_session, "hr_staff"), f"received-{doc.id}")

        feed = service.feed(_user(db_session, "hr_staff"))
        assert feed.unread_count == 0
        assert feed.notifications[0].read

    def test_mark_all_read_sets_section_flag(self, db_session, make_document):
        make_document(statuses=("Sent",))
        make_document(title="Second", statuses=("Sent",))
        prefs = NotificationService(db_session).mark_all_read(_user(db_session, "edp_staff"))
        assert prefs.notifications is True
        assert len(prefs.read_notification_ids) == 2

    def test_clear_all_marks_read_and_cleared(self, db_session, make_document):
        doc = make_document(statuses=("Sent",))
        service = NotificationService(db_session)
        service.clear_all(_user(db_session, "hr_head"))

        stored = _user(db_session, "hr_head").preferences
        assert stored["readNotificationIds"] == [f"received-{doc.id}"]
        assert stored["clearedNotificationIds"] == [f"received-{doc.id}"]
        assert stored["notifications"] is True

        feed = service.feed(_user(db_session, "hr_head"))
        assert feed.badges.notifications == 0
        assert feed.notifications[0].cleared

    def test_clear_section(self, db_session, make_document):
        make_document()
        service = NotificationService(db_session)
        service.clear_section(_user(db_session, "edp_staff"), "queue")

        feed = service.feed(_user(db_session, "edp_staff"))
        assert feed.badges.queue == 0
        assert _user(db_session, "edp_staff").preferences["queue"] is True

    def test_new_document_rearms_after_clear(self, db_session, make_document):
        make_document(statuses=("Sent",))
        service = NotificationService(db_session)
        service.clear_all(_user(db_session, "hr_staff"))

        make_document(title="Later", statuses=("Sent",))
        feed = service.feed(_user(db_session, "hr_staff"))
        assert feed.badges.notifications == 1
        assert _user(db_session, "hr_staff").preferences["notifications"] is False

    def test_add_follow_up(self, db_session, make_document):
        doc = make_document(title="Invoice", statuses=("Sent",))
        service = NotificationService(db_session)
        follow_up = service.add_follow_up(doc.id, "edp_staff")

        assert follow_up.id.startswith(f"follow-up-{doc.id}-")
        assert follow_up.department == "HR"
        assert follow_up.message == "Action Needed: Invoice"

        hr_feed = service.feed(_user(db_session, "hr_staff"))
        assert follow_up.id in {n.id for n in hr_feed.notifications}
        edp_feed = service.feed(_user(db_session, "edp_staff"))
        assert follow_up.id not in {n.id for n in edp_feed.notifications}

    def test_add_follow_up_missing_document(self, db_session):
        with pytest.raises(NotFoundError):
            NotificationService(db_session).add_follow_up(404, "edp_staff")

    def test_unread_count_does_not_write(self, db_session, make_document):
        make_document(statuses=("Sent",))
        user = _user(db_session, "hr_staff")
        user.preferences = {"notifications": True}
        db_session.commit()

        assert NotificationService(db_session).unread_count(user) == 1
        assert _user(db_session, "hr_staff").preferences == {"notifications": True}

    def test_deleted_document_id_not_reused(self, db_session, make_document):
        old_id = make_document(statuses=("Sent",)).id
        service = NotificationService(db_session)
        service.mark_all_read(_user(db_session, "hr_staff"))
        DocumentService(db_session).delete_document(old_id)

        new = make_document(title="Brand New", statuses=("Sent",))
        assert new.id != old_id

        feed = service.feed(_user(db_session, "hr_staff"))
        assert [(n.id, n.read) for n in feed.notifications] == [(f"received-{new.id}", False)]
        assert feed.unread_count == 1
        assert _user(db_session, "hr_staff").preferences["notifications"] is False

    def test_deleting_document_removes_follow_ups(self, db_session, make_document):
        doc = make_document(statuses=("Sent",))
        service = NotificationService(db_session)
        service.add_follow_up(doc.id, "edp_staff")

        DocumentService(db_session).delete_document(doc.id)

        assert db_session.query(FollowUpNotification).count() == 0
        feed = service.feed(_user(db_session, "hr_staff"))
        assert not any(n.type is NotificationType.FOLLOW_UP for n in feed.notifications)

    def test_clearing_documents_removes_follow_ups(self, db_session, make_document):
        service = NotificationService(db_session)
        service.add_follow_up(make_document(statuses=("Sent",)).id, "edp_staff")
        service.add_follow_up(make_document(title="Other").id, "edp_staff")

        DocumentService(db_session).clear_documents(_user(db_session, "admin"))

        assert db_session.query(FollowUpNotification).count() == 0

    def test_follow_ups_in_same_millisecond_get_distinct_ids(self, db_session, make_document):
        doc = make_document(statuses=("Sent",))
        service = NotificationService(db_session)
        frozen = datetime(2025, 5, 1, 9, 0, tzinfo=UTC)
        with patch("dms.repositories.follow_up_repository.utc_now", return_value=frozen):
            first = service.add_follow_up(doc.id, "edp_staff")
            second = service.add_follow_up(doc.id, "edp_head")

        millis = int(frozen.timestamp() * 1000)
        assert first.id == f"follow-up-{doc.id}-{millis}"
        assert second.id == f"follow-up-{doc.id}-{millis + 1}"
