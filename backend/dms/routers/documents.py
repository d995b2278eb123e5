"""Document API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dms.core.auth import get_current_user
from dms.core.database import get_db
from dms.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)
from dms.models.document import Document, DocumentCategory
from dms.models.user import User
from dms.schemas.document import (
    DocumentChangeResponse,
    DocumentCreate,
    DocumentCreateResponse,
    DocumentResponse,
    DocumentStatusUpdate,
)
from dms.schemas.notification import FollowUpResponse
from dms.services.document_service import DocumentService
from dms.services.notification_service import NotificationService
from dms.services.status_transition import StatusTransitionService

router = APIRouter()


@router.get(
    "/",
    response_model=list[DocumentResponse],
    summary="List documents",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def list_documents(
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Document]:
    """List every document, newest first unless ``order_by`` says otherwise."""
    return DocumentService(db).list_documents(order_by=order_by)


@router.get(
    "/category/{category}",
    response_model=list[DocumentResponse],
    summary="List documents in a category",
    responses={401: {"description": "Missing or unknown X-Username header"}},
)
async def list_documents_by_category(
    category: DocumentCategory,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Document]:
    return DocumentService(db).list_by_category(category)


@router.post(
    "/",
    response_model=DocumentCreateResponse,
    status_code=201,
    summary="Create document",
    responses={
        400: {"description": "A required field is blank"},
        401: {"description": "Missing or unknown X-Username header"},
    },
)
async def create_document(
    data: DocumentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DocumentCreateResponse:
    """Create a document in the queue, waiting for confirmation."""
    try:
        document = DocumentService(db).create_document(data, current_user.username)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return DocumentCreateResponse(id=document.id, message="Document created successfully")


@router.put(
    "/{document_id}/status",
    response_model=DocumentChangeResponse,
    summary="Update document status",
    responses={
        401: {"description": "Missing or unknown X-Username header"},
        404: {"description": "Document not found"},
        500: {"description": "Status could not be stored"},
    },
)
async def update_document_status(
    document_id: int,
    data: DocumentStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DocumentChangeResponse:
    """Set a new status; the document moves to the category it implies."""
    try:
        count = StatusTransitionService(db).update_status(
            document_id,
            data.status,
            current_user.username,
            is_received_side=data.is_received_side,
        )
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None
    if count == 0:
        raise HTTPException(status_code=404, detail="Document not found")
    return DocumentChangeResponse(message="Document updated successfully", changes=count)


@router.delete(
    "/{document_id}",
    response_model=DocumentChangeResponse,
    summary="Delete document",
    responses={
        401: {"description": "Missing or unknown X-Username header"},
        404: {"description": "Document not found"},
    },
)
async def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DocumentChangeResponse:
    count = DocumentService(db).delete_document(document_id)
    if count == 0:
        raise HTTPException(status_code=404, detail="Document not found")
    return DocumentChangeResponse(message="Document deleted successfully", changes=count)


@router.post(
    "/clear",
    response_model=DocumentChangeResponse,
    summary="Delete all documents",
    responses={
        401: {"description": "Missing or unknown X-Username header"},
        403: {"description": "Administrators only"},
    },
)
async def clear_documents(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DocumentChangeResponse:
    """Delete every document. Users and preferences are kept."""
    try:
        count = DocumentService(db).clear_documents(current_user)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None
    return DocumentChangeResponse(message="All documents cleared", changes=count)


@router.post(
    "/{document_id}/follow_up",
    response_model=FollowUpResponse,
    status_code=201,
    summary="Request follow-up on a document",
    responses={
        401: {"description": "Missing or unknown X-Username header"},
        404: {"description": "Document not found"},
    },
)
async def add_follow_up(
    document_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FollowUpResponse:
    """Notify the recipient department that the document needs action."""
    try:
        follow_up = NotificationService(db).add_follow_up(document_id, current_user.username)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return FollowUpResponse.model_validate(follow_up)
