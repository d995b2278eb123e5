"""Insert sample archived documents so the History view has data to show.

Usage: python scripts/seed_history.py (from the backend directory).
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from dms.core import database
from dms.models.document import Document, DocumentCategory

logger = logging.getLogger(__name__)


def _at(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=UTC)


SAMPLE_DOCUMENTS = [
    {
        "title": "Monthly Sales Report - October",
        "sender": "John Smith",
        "recipient": "Finance Department",
        "department": "Accounting",
        "document_type": "Report",
        "description": "October sales performance and analysis",
        "status": "Received",
        "date_sent": _at(2024, 10, 15, 9, 30),
        "date_received": _at(2024, 10, 16, 14, 15),
        "updated_by": "finance_mgr",
    },
    {
        "title": "IT Infrastructure Upgrade Proposal",
        "sender": "Sarah Johnson",
        "recipient": "Management Team",
        "department": "EDP",
        "document_type": "Proposal",
        "description": "Proposal for upgrading company IT infrastructure",
        "status": "Received",
        "date_sent": _at(2024, 9, 28, 11, 45),
        "date_received": _at(2024, 10, 2, 16, 20),
        "updated_by": "it_director",
    },
    {
        "title": "Employee Handbook Update",
        "sender": "HR Manager",
        "recipient": "All Departments",
        "department": "HR",
        "document_type": "Memo",
        "description": "Updated employee handbook with new policies",
        "status": "Received",
        "date_sent": _at(2024, 11, 1, 8, 0),
        "date_received": _at(2024, 11, 5, 15, 30),
        "updated_by": "hr_specialist",
    },
    {
        "title": "Budget Allocation Request - Q4",
        "sender": "Department Head",
        "recipient": "Finance Committee",
        "department": "Admin",
        "document_type": "Request",
        "description": "Request for Q4 budget allocation",
        "status": "Not Received",
        "date_sent": _at(2024, 10, 20, 10, 15),
        "date_received": _at(2024, 10, 25, 13, 45),
        "updated_by": "finance_mgr",
    },
    {
        "title": "Vendor Contract Agreement",
        "sender": "Procurement Officer",
        "recipient": "Legal Department",
        "department": "Admin",
        "document_type": "Contract",
        "description": "Contract agreement with new office supplies vendor",
        "status": "Received",
        "date_sent": _at(2024, 9, 15, 14, 30),
        "date_received": _at(2024, 9, 20, 11, 0),
        "updated_by": "legal_counsel",
    },
    {
        "title": "Training Program Schedule",
        "sender": "Training Coordinator",
        "recipient": "All Staff",
        "department": "HR",
        "document_type": "Memo",
        "description": "Schedule for upcoming staff training programs",
        "status": "Received",
        "date_sent": _at(2024, 11, 10, 9, 0),
        "date_received": _at(2024, 11, 12, 16, 45),
        "updated_by": "hr_specialist",
    },
    {
        "title": "System Maintenance Notice",
        "sender": "IT Support",
        "recipient": "All Users",
        "department": "EDP",
        "document_type": "Memo",
        "description": "Scheduled system maintenance notification",
        "status": "Received",
        "date_sent": _at(2024, 10, 5, 15, 20),
        "date_received": _at(2024, 10, 8, 9, 15),
        "updated_by": "it_support",
    },
    {
        "title": "Performance Review Guidelines",
        "sender": "HR Director",
        "recipient": "Management Team",
        "department": "HR",
        "document_type": "Guidelines",
        "description": "Updated guidelines for employee performance reviews",
        "status": "Not Received",
        "date_sent": _at(2024, 8, 30, 13, 0),
        "date_received": _at(2024, 9, 5, 10, 30),
        "updated_by": "hr_director",
    },
    {
        "title": "Office Renovation Plans",
        "sender": "Facilities Manager",
        "recipient": "Executive Board",
        "department": "Admin",
        "document_type": "Plan",
        "description": "Detailed plans for office renovation project",
        "status": "Received",
        "date_sent": _at(2024, 11, 15, 11, 30),
        "date_received": _at(2024, 11, 18, 14, 0),
        "updated_by": "facilities_mgr",
    },
    {
        "title": "Annual Audit Report",
        "sender": "External Auditor",
        "recipient": "Board of Directors",
        "department": "Accounting",
        "document_type": "Report",
        "description": "Comprehensive annual audit report for fiscal year 2024",
        "status": "Received",
        "date_sent": _at(2024, 7, 20, 10, 0),
        "date_received": _at(2024, 8, 1, 15, 45),
        "updated_by": "audit_committee",
    },
]


def seed_history(db: Session, created_by_user: str = "admin") -> list[Document]:
    """Insert every sample document as archived and return the new rows."""
    documents = [
        Document(
            **sample,
            document_category=DocumentCategory.ARCHIVED.value,
            created_by_user=created_by_user,
        )
        for sample in SAMPLE_DOCUMENTS
    ]
    db.add_all(documents)
    db.commit()
    for document in documents:
        db.refresh(document)
        logger.info("Inserted document %s: %s", document.id, document.title)
    return documents


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    database.init_db()
    session = database.SessionLocal()
    try:
        inserted = seed_history(session)
    finally:
        session.close()
    print(f"Inserted {len(inserted)} sample documents into History.")
