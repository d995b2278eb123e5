from datetime import date

from pydantic import BaseModel


class CategoryStatsResponse(BaseModel):
    queue: int
    received: int
    archived: int
    total: int


class LabelCount(BaseModel):
    label: str
    count: int


class DocumentTotals(BaseModel):
    total: int
    sent: int
    received: int
    pending: int


class StatusBreakdown(BaseModel):
    in_queue: int
    sent_awaiting_response: int
    received: int
    not_received: int
    not_sent: int


class UserStatistics(BaseModel):
    total: int
    administrators: int
    department_heads: int
    staff: int
    working_students: int


class RecentActivity(BaseModel):
    today: int
    this_week: int
    this_month: int


class ReportSummaryResponse(BaseModel):
    date_from: date | None
    date_to: date | None
    department: str | None
    documents: DocumentTotals
    status_breakdown: StatusBreakdown
    by_department: list[LabelCount] | None = None
    by_type: list[LabelCount]
    users: UserStatistics
    users_by_department: list[LabelCount] | None = None
    recent_activity: RecentActivity
    unread_notifications: int
