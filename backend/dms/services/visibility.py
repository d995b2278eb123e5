"""Role and department based visibility, shared by every derived view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from dms.models.user import UserRole


class RoutedDocument(Protocol):
    department: Any
    sender_department: Any


@dataclass(frozen=True)
class VisibilityScope:
    """What a viewer may see.

    ``sees_all_departments`` lifts the department restriction on Outgoing,
    Inbox and notifications; ``sees_all_history`` lifts it on History only.
    """

    role: str
    department: str | None
    sees_all_departments: bool
    sees_all_history: bool
    can_manage_users: bool
    can_view_reports: bool
    can_manage_settings: bool

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def is_sender(self, document: RoutedDocument) -> bool:
        return self.department is not None and document.sender_department == self.department

    def is_recipient(self, document: RoutedDocument) -> bool:
        return self.department is not None and document.department == self.department

    def sees_as_sender(self, document: RoutedDocument) -> bool:
        return self.sees_all_departments or self.is_sender(document)

    def sees_as_recipient(self, document: RoutedDocument) -> bool:
        return self.sees_all_departments or self.is_recipient(document)

    def sees_archived(self, document: RoutedDocument) -> bool:
        return (
            self.sees_all_history
            or self.is_sender(document)
            or self.is_recipient(document)
        )

    def sees_completed_outgoing(self, document: RoutedDocument) -> bool:
        return self.sees_all_history or self.is_sender(document)

    def sees_follow_up(self, department: str | None) -> bool:
        return self.sees_all_departments or (
            self.department is not None and department == self.department
        )


def visibility_scope(role: UserRole | str, department: str | None) -> VisibilityScope:
    """Resolve the capabilities of a viewer from their role and department."""
    role_value = UserRole(role).value
    is_admin = role_value == UserRole.ADMIN.value
    is_head = role_value == UserRole.DEPARTMENT_HEAD.value
    return VisibilityScope(
        role=role_value,
        department=department or None,
        sees_all_departments=is_admin,
        sees_all_history=is_admin or is_head,
        can_manage_users=is_admin or is_head,
        can_view_reports=is_admin or is_head,
        can_manage_settings=is_admin,
    )
