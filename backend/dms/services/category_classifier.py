"""Maps a status change to the category the document belongs in afterwards."""

from __future__ import annotations

from dms.models.document import DocumentCategory, DocumentStatus

# Queue side: the sender has not dispatched the document yet.
_QUEUE_TRANSITIONS = {
    DocumentStatus.SENT: DocumentCategory.RECEIVED,
    DocumentStatus.NOT_SENT: DocumentCategory.ARCHIVED,
}

# Received side: the document is in flight to the recipient department.
_RECEIVED_TRANSITIONS = {
    DocumentStatus.RECEIVED: DocumentCategory.ARCHIVED,
    DocumentStatus.NOT_RECEIVED: DocumentCategory.ARCHIVED,
}


def classify(
    previous_category: DocumentCategory | str,
    is_received_side: bool,
    new_status: DocumentStatus | str,
) -> DocumentCategory:
    """Return the category a document moves to when given ``new_status``.

    The branch depends on the side of the workflow the document is on, not on
    the status alone: queue-side documents move to ``received`` when sent and
    to ``archived`` when cancelled, received-side documents are archived once
    the recipient confirms or rejects them. Any other status keeps the
    document where it is.

    Raises:
        ValueError: if ``previous_category`` is ``archived`` or the arguments
            disagree about the side (archived documents are terminal).
    """
    category = DocumentCategory(previous_category)
    status = DocumentStatus(new_status)

    if category is DocumentCategory.ARCHIVED:
        raise ValueError("Archived documents have no further category transitions")

    if is_received_side != (category is DocumentCategory.RECEIVED):
        raise ValueError(
            f"Document in category '{category.value}' cannot be classified "
            f"as {'received' if is_received_side else 'queue'}-side"
        )

    if is_received_side:
        return _RECEIVED_TRANSITIONS.get(status, DocumentCategory.RECEIVED)
    return _QUEUE_TRANSITIONS.get(status, DocumentCategory.QUEUE)
