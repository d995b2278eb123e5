"""Tests for reporting endpoints and the report service."""

from datetime import UTC, date, datetime, timedelta

import pytest

from dms.core.exceptions import PermissionDeniedError
from dms.models.document import Document
from dms.models.user import User
from dms.schemas.document import DocumentResponse
from dms.services.report_service import ReportService, in_range


class TestStats:
    def test_counts_per_category(self, client, as_user, make_document):
        make_document()
        make_document(statuses=("Sent",))
        make_document(statuses=("Sent", "Received"))
        make_document(statuses=("Not Sent",))

        response = client.get("/v1/reports/stats", headers=as_user("hr_staff"))
        assert response.status_code == 200
        assert response.json() == {"queue": 1, "received": 1, "archived": 2, "total": 4}

    def test_empty(self, client, as_user):
        response = client.get("/v1/reports/stats", headers=as_user("admin"))
        assert response.json() == {"queue": 0, "received": 0, "archived": 0, "total": 0}


class TestSummary:
    def test_admin_summary(self, client, as_user, make_document):
        make_document()
        make_document(statuses=("Sent",))
        make_document(document_type="Report", statuses=("Sent", "Received"))
        make_document(created_by="hr_staff", department="EDP", statuses=("Not Sent",))

        response = client.get("/v1/reports/summary", headers=as_user("admin"))
        assert response.status_code == 200
        data = response.json()
        assert data["department"] is None
        assert data["documents"] == {"total": 4, "sent": 3, "received": 1, "pending": 2}
        assert data["status_breakdown"] == {
            "in_queue": 1,
            "sent_awaiting_response": 1,
            "received": 1,
            "not_received": 0,
            "not_sent": 1,
        }
        assert data["by_department"] == [
            {"label": "EDP", "count": 1},
            {"label": "HR", "count": 3},
        ]
        assert data["by_type"] == [
            {"label": "Memo", "count": 3},
            {"label": "Report", "count": 1},
        ]
        assert data["users"] == {
            "total": 6,
            "administrators": 1,
            "department_heads": 2,
            "staff": 2,
            "working_students": 1,
        }
        assert data["users_by_department"] == [
            {"label": "EDP", "count": 2},
            {"label": "HR", "count": 3},
        ]
        assert data["recent_activity"] == {"today": 4, "this_week": 4, "this_month": 4}

    def test_department_head_summary(self, client, as_user, make_document):
        make_document(statuses=("Sent",))
        make_document(created_by="hr_staff", department="EDP")

        data = client.get("/v1/reports/summary", headers=as_user("hr_head")).json()
        assert data["department"] == "HR"
        assert data["documents"]["total"] == 1
        assert data["by_department"] is None
        assert data["users_by_department"] is None
        assert data["users"]["total"] == 3
        assert data["unread_notifications"] == 1

    def test_staff_forbidden(self, client, as_user):
        response = client.get("/v1/reports/summary", headers=as_user("edp_staff"))
        assert response.status_code == 403

    def test_inverted_range(self, client, as_user):
        response = client.get(
            "/v1/reports/summary?date_from=2025-02-01&date_to=2025-01-01",
            headers=as_user("admin"),
        )
        assert response.status_code == 400

    def test_date_range_excludes_old_documents(self, db_session, make_document):
        old = make_document(statuses=("Sent", "Received"))
        make_document()
        db_session.query(Document).filter(Document.id == old.id).update(
            {"date_sent": datetime(2024, 1, 5, 10, 0, tzinfo=UTC)}
        )
        db_session.commit()

        admin = db_session.query(User).filter(User.username == "admin").one()
        today = datetime.now(UTC).date()
        summary = ReportService(db_session).summary(admin, date_from=today - timedelta(days=1))
        assert summary.documents.total == 1

        january = ReportService(db_session).summary(
            admin, date_from=date(2024, 1, 1), date_to=date(2024, 1, 5)
        )
        assert january.documents.total == 1
        assert january.documents.received == 1

    def test_service_rejects_staff(self, db_session):
        staff = db_session.query(User).filter(User.username == "hr_staff").one()
        with pytest.raises(PermissionDeniedError):
            ReportService(db_session).summary(staff)


class TestInRange:
    def _doc(self, sent):
        return DocumentResponse(
            id=1,
            title="T",
            sender="S",
            recipient="R",
            department="HR",
            document_type="Memo",
            status="Sent",
            document_category="received",
            date_sent=sent,
        )

    def test_unbounded(self):
        assert in_range(self._doc(None), None, None)

    def test_undated_excluded_when_bounded(self):
        assert not in_range(self._doc(None), date(2024, 1, 1), None)

    def test_upper_bound_inclusive(self):
        doc = self._doc(datetime(2024, 3, 31, 23, 0, tzinfo=UTC))
        assert in_range(doc, None, date(2024, 3, 31))
        assert not in_range(doc, None, date(2024, 3, 30))
