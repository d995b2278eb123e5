"""Derived document views: Outgoing, Inbox and History."""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dms.core.auth import get_current_user
from dms.core.database import get_db
from dms.models.user import User
from dms.schemas.document import DocumentResponse, OutgoingDocumentResponse
from dms.schemas.view import HistoryFilter, SectionCountsResponse
from dms.services.view_projector import ViewProjector
from dms.services.visibility import visibility_scope

router = APIRouter()


def _projector(db: Session, user: User) -> ViewProjector:
    return ViewProjector.from_db(db, visibility_scope(user.role, user.department))


@router.get(
    "/outgoing",
    response_model=list[OutgoingDocumentResponse],
    summary="Outgoing documents",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def outgoing(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[OutgoingDocumentResponse]:
    """Queued documents and sent documents awaiting a response."""
    return _projector(db, current_user).outgoing()


@router.get(
    "/inbox",
    response_model=list[DocumentResponse],
    summary="Inbox documents",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def inbox(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[DocumentResponse]:
    return _projector(db, current_user).inbox()


@router.get(
    "/history",
    response_model=list[DocumentResponse],
    summary="Document history",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def history(
    search: str = Query(default=""),
    departments: list[str] | None = Query(default=None),
    statuses: list[str] | None = Query(default=None),
    document_types: list[str] | None = Query(default=None),
    no_departments: bool = Query(default=False),
    no_statuses: bool = Query(default=False),
    no_document_types: bool = Query(default=False),
    sort_order: Literal["newest", "oldest"] = Query(default="newest"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[DocumentResponse]:
    """Finished documents, searchable and filterable.

    Omitting a filter selects every value. A query string cannot carry an
    empty list, so the ``no_*`` flags deselect every value of a dimension.
    """
    history_filter = HistoryFilter(
        search=search,
        departments=[] if no_departments else departments,
        statuses=[] if no_statuses else statuses,
        document_types=[] if no_document_types else document_types,
        sort_order=sort_order,
    )
    return _projector(db, current_user).history(history_filter)


@router.get(
    "/counts",
    response_model=SectionCountsResponse,
    summary="Section counts",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def counts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SectionCountsResponse:
    """Unfiltered number of documents in each view."""
    return _projector(db, current_user).counts()
