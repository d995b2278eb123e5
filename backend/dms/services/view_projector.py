"""Derives the Outgoing, Inbox and History views from a document snapshot.

Views are recomputed on every request from a fresh snapshot of the three
category lists; nothing here writes to the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from dms.core.config import settings
from dms.models.document import COMPLETED_STATUSES, DocumentCategory, DocumentStatus
from dms.models.shared import as_utc, utc_now
from dms.repositories.document_repository import DocumentRepository
from dms.schemas.document import DocumentResponse, OutgoingDocumentResponse
from dms.schemas.view import HistoryFilter, SectionCountsResponse
from dms.services.visibility import VisibilityScope

_EARLIEST = datetime.min.replace(tzinfo=UTC)


@dataclass
class DocumentSnapshot:
    queue: list[DocumentResponse] = field(default_factory=list)
    received: list[DocumentResponse] = field(default_factory=list)
    archived: list[DocumentResponse] = field(default_factory=list)


def load_snapshot(db: Session) -> DocumentSnapshot:
    """Fetch every document, grouped by category, with sender departments."""
    repo = DocumentRepository(db)

    def _load(category: DocumentCategory) -> list[DocumentResponse]:
        return [DocumentResponse.model_validate(d) for d in repo.list_by_category(category)]

    return DocumentSnapshot(
        queue=_load(DocumentCategory.QUEUE),
        received=_load(DocumentCategory.RECEIVED),
        archived=_load(DocumentCategory.ARCHIVED),
    )


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


def effective_date(document: DocumentResponse) -> datetime | None:
    """The date a document is listed under: received date, else sent date."""
    value = document.date_received or document.date_sent
    return as_utc(value) if value is not None else None


def is_overdue(document: DocumentResponse, now: datetime, days: int) -> bool:
    sent = document.date_sent or document.date_received
    if sent is None:
        return False
    return now - as_utc(sent) > timedelta(days=days)


def matches_search(document: DocumentResponse, query: str) -> bool:
    """Case-insensitive substring match over the searchable fields."""
    needle = query.lower()
    if not needle:
        return True
    listed = effective_date(document)
    haystack = (
        document.title,
        document.sender,
        document.recipient,
        document.sender_department or "",
        document.department,
        str(document.id),
        document.updated_by or "",
        (document.date_received or document.date_sent).isoformat() if listed else "",
    )
    return any(needle in value.lower() for value in haystack)


def matches_filters(document: DocumentResponse, history_filter: HistoryFilter) -> bool:
    """AND across dimensions, OR within one; an empty selection matches nothing."""
    selections = (
        (history_filter.departments, document.department),
        (history_filter.statuses, _value(document.status)),
        (history_filter.document_types, document.document_type),
    )
    for selected, value in selections:
        if selected is not None and value not in selected:
            return False
    return matches_search(document, history_filter.search)


def sort_history(
    documents: list[DocumentResponse], sort_order: str = "newest"
) -> list[DocumentResponse]:
    """Order by listed date; equal dates fall back to id in the same direction."""
    return sorted(
        documents,
        key=lambda d: (effective_date(d) or _EARLIEST, d.id),
        reverse=sort_order == "newest",
    )


class ViewProjector:
    """Projects a snapshot onto the views one viewer is allowed to see."""

    def __init__(self, snapshot: DocumentSnapshot, scope: VisibilityScope):
        self.snapshot = snapshot
        self.scope = scope

    @classmethod
    def from_db(cls, db: Session, scope: VisibilityScope) -> ViewProjector:
        return cls(load_snapshot(db), scope)

    def outgoing(
        self, now: datetime | None = None, stale_days: int | None = None
    ) -> list[OutgoingDocumentResponse]:
        """Documents the viewer's department sent that are still in flight."""
        now = as_utc(now) if now is not None else utc_now()
        days = settings.STALE_DOCUMENT_DAYS if stale_days is None else stale_days
        queued = [d for d in self.snapshot.queue if self.scope.sees_as_sender(d)]
        awaiting = [
            d
            for d in self.snapshot.received
            if _value(d.status) == DocumentStatus.SENT.value and self.scope.sees_as_sender(d)
        ]
        return [
            OutgoingDocumentResponse(
                **d.model_dump(), is_overdue=is_overdue(d, now, days)
            )
            for d in queued + awaiting
        ]

    def inbox(self) -> list[DocumentResponse]:
        """Documents addressed to the viewer's department, not yet finalized."""
        return [d for d in self.snapshot.received if self.scope.sees_as_recipient(d)]

    def _history_candidates(self) -> list[DocumentResponse]:
        archived = [d for d in self.snapshot.archived if self.scope.sees_archived(d)]
        completed = [
            d
            for d in self.snapshot.received
            if _value(d.status) in COMPLETED_STATUSES and self.scope.sees_completed_outgoing(d)
        ]
        return archived + completed

    def history(self, history_filter: HistoryFilter | None = None) -> list[DocumentResponse]:
        """Finished documents, filtered and sorted for the History view."""
        history_filter = history_filter or HistoryFilter()
        documents = [
            d for d in self._history_candidates() if matches_filters(d, history_filter)
        ]
        return sort_history(documents, history_filter.sort_order)

    def counts(self) -> SectionCountsResponse:
        """Unfiltered sizes of the three views."""
        return SectionCountsResponse(
            outgoing=len(self.outgoing()),
            inbox=len(self.inbox()),
            history=len(self._history_candidates()),
        )
