from typing import Literal

from pydantic import BaseModel


class HistoryFilter(BaseModel):
    """Search and multi-select filters for the History view.

    A ``None`` selection means every value is selected; an empty list
    matches nothing.
    """

    search: str = ""
    departments: list[str] | None = None
    statuses: list[str] | None = None
    document_types: list[str] | None = None
    sort_order: Literal["newest", "oldest"] = "newest"


class SectionCountsResponse(BaseModel):
    outgoing: int
    inbox: int
    history: int
