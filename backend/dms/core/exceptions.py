"""Typed failures raised by the service layer.

Routers translate these into HTTP errors; update and delete operations on a
missing row do not raise and return an affected-row count of zero instead.
"""

from __future__ import annotations


class DmsError(Exception):
    """Base class for all service-level failures."""


class NotFoundError(DmsError):
    """A lookup targeted a record that does not exist."""


class ValidationError(DmsError):
    """Input was rejected before any store mutation."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConflictError(DmsError):
    """A uniqueness rule was violated, e.g. a duplicate username."""


class ProtectedResourceError(DmsError):
    """The target is reserved and may never be modified this way."""


class PermissionDeniedError(DmsError):
    """The acting user's role does not allow the operation."""


class StoreError(DmsError):
    """The persistence layer failed; the transaction was rolled back."""
