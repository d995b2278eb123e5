import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dms.core import database
from dms.core.config import settings
from dms.routers import auth, documents, notifications, reports, users, views
from dms.services.user_service import UserService

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Auth", "description": "Log in with a username and password."},
    {"name": "Users", "description": "Manage user accounts and their preferences."},
    {"name": "Documents", "description": "Create documents and move them through their workflow."},
    {"name": "Views", "description": "Outgoing, Inbox and History views of the documents."},
    {"name": "Notifications", "description": "Per-user notification feed and section badges."},
    {"name": "Reports", "description": "Document statistics and report summaries."},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    database.init_db()
    db = database.SessionLocal()
    try:
        UserService(db).seed_admin()
    finally:
        db.close()
    logger.info("%s %s started", settings.APP_NAME, settings.version)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Departmental document-routing tracker. "
        "Route documents between departments, follow their status, "
        "and review history, notifications and reports."
    ),
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/v1/auth", tags=["Auth"])
app.include_router(users.router, prefix="/v1/users", tags=["Users"])
app.include_router(documents.router, prefix="/v1/documents", tags=["Documents"])
app.include_router(views.router, prefix="/v1/views", tags=["Views"])
app.include_router(
    notifications.router,
    prefix="/v1/notifications",
    tags=["Notifications"],
)
app.include_router(reports.router, prefix="/v1/reports", tags=["Reports"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "message": "Server is running"}
