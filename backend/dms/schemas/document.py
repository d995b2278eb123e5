from datetime import datetime

from pydantic import BaseModel, Field

from dms.models.document import DocumentCategory, DocumentStatus


class DocumentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    sender: str = Field(..., min_length=1, max_length=255)
    recipient: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=100)
    document_type: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    file_name: str | None = Field(default=None, max_length=255)


class DocumentStatusUpdate(BaseModel):
    status: DocumentStatus
    # Which side of the workflow the caller is acting from; the stored
    # category decides for queue and received documents.
    is_received_side: bool | None = None


class DocumentResponse(BaseModel):
    id: int
    title: str
    sender: str
    recipient: str
    department: str
    document_type: str
    description: str | None = ""
    status: DocumentStatus
    document_category: DocumentCategory
    date_sent: datetime | None = None
    date_received: datetime | None = None
    last_updated: datetime | None = None
    file_name: str | None = None
    created_by_user: str | None = None
    sender_department: str | None = None
    updated_by: str | None = None

    model_config = {"from_attributes": True}


class OutgoingDocumentResponse(DocumentResponse):
    is_overdue: bool = False


class DocumentCreateResponse(BaseModel):
    id: int
    message: str


class DocumentChangeResponse(BaseModel):
    message: str
    changes: int
