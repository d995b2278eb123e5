"""Shared test fixtures for all test modules."""

import contextlib

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import dms.models  # noqa: F401
from dms.core import database as db_module
from dms.core.database import Base, get_db
from dms.main import app
from dms.models.user import User
from dms.repositories.document_repository import DocumentRepository
from dms.schemas.document import DocumentCreate
from dms.services.status_transition import StatusTransitionService
from dms.services.user_service import UserService

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# username -> (role, department)
SAMPLE_USERS = {
    "edp_head": ("Department Head", "EDP"),
    "edp_staff": ("Staff", "EDP"),
    "hr_head": ("Department Head", "HR"),
    "hr_staff": ("Staff", "HR"),
    "hr_student": ("Working Student", "HR"),
}


def _seed_users(session: Session) -> None:
    """Insert the admin account plus one user per role and department."""
    UserService(session).seed_admin()
    for username, (role, department) in SAMPLE_USERS.items():
        session.add(
            User(
                username=username,
                password="secret",
                role=role,
                department=department,
                created_by="admin",
                preferences={},
            )
        )
    session.commit()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    session = _TestSessionLocal()
    try:
        _seed_users(session)
    finally:
        session.close()

    yield
    with _test_engine.connect() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        # Restart AUTOINCREMENT counters so each test sees ids from 1.
        with contextlib.suppress(OperationalError):
            conn.execute(text("DELETE FROM sqlite_sequence"))
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def as_user():
    """Build the request headers identifying the acting user."""

    def _headers(username: str) -> dict[str, str]:
        return {"X-Username": username}

    return _headers


@pytest.fixture
def make_document(db_session):
    """Create a document as ``created_by`` and optionally move it through statuses."""

    def _make(
        created_by: str = "edp_staff",
        department: str = "HR",
        title: str = "Budget Memo",
        statuses: tuple[str, ...] = (),
        document_type: str = "Memo",
    ):
        document = DocumentRepository(db_session).create(
            DocumentCreate(
                title=title,
                sender="Alice",
                recipient="Bob",
                department=department,
                document_type=document_type,
                description="",
            ),
            created_by_user=created_by,
        )
        engine = StatusTransitionService(db_session)
        for status in statuses:
            engine.update_status(document.id, status, created_by)
        db_session.refresh(document)
        return document

    return _make
