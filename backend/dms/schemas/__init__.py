from dms.schemas.document import (
    DocumentChangeResponse,
    DocumentCreate,
    DocumentCreateResponse,
    DocumentResponse,
    DocumentStatusUpdate,
    OutgoingDocumentResponse,
)
from dms.schemas.notification import (
    FollowUpResponse,
    NotificationFeedResponse,
    NotificationResponse,
    NotificationType,
    SectionBadges,
)
from dms.schemas.preferences import PreferencesEnvelope, UserPreferences
from dms.schemas.report import CategoryStatsResponse, ReportSummaryResponse
from dms.schemas.user import (
    LoginRequest,
    LoginResponse,
    PasswordChange,
    UserCreate,
    UserCreateResponse,
    UserResponse,
)
from dms.schemas.view import HistoryFilter, SectionCountsResponse

__all__ = [
    "CategoryStatsResponse",
    "DocumentChangeResponse",
    "DocumentCreate",
    "DocumentCreateResponse",
    "DocumentResponse",
    "DocumentStatusUpdate",
    "FollowUpResponse",
    "HistoryFilter",
    "LoginRequest",
    "LoginResponse",
    "NotificationFeedResponse",
    "NotificationResponse",
    "NotificationType",
    "OutgoingDocumentResponse",
    "PasswordChange",
    "PreferencesEnvelope",
    "ReportSummaryResponse",
    "SectionBadges",
    "SectionCountsResponse",
    "UserCreate",
    "UserCreateResponse",
    "UserPreferences",
    "UserResponse",
]
