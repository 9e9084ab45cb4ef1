"""
Noteful API: Exception Hierarchy
================================

What:  Application exceptions, each tagged with an ErrorKind.
How:   Services raise these; one handler in main.py maps the kind to an HTTP
       status through STATUS_BY_KIND and renders a JSON error body.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError   kind=VALIDATION → 400 Bad Request
    ├── NotFoundError     kind=NOT_FOUND  → 404 Not Found
    └── DatabaseError     kind=STORE      → 500 Internal Server Error
"""

import enum
from typing import Any, Dict, Optional


class ErrorKind(str, enum.Enum):
    """Category of an application error; the value is the wire error code."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    STORE = "server_error"


# Transport mapping for each kind, consulted only by the HTTP layer
STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 500,
}


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        kind:     ErrorKind used for the HTTP status and the `error` code
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    kind: ErrorKind = ErrorKind.STORE

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(NotefulError):
    """
    Raised when a request body is missing a required field.

    Example response:
        {
            "error": "validation_error",
            "message": "Missing `name` in request body",
            "details": {"field": "name"}
        }
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field

    @classmethod
    def missing_field(cls, field: str) -> "ValidationError":
        """One error per missing field, worded the way clients expect."""
        return cls(message=f"Missing `{field}` in request body", field=field)


class NotFoundError(NotefulError):
    """Raised when no row matches the requested id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotefulError):
    """
    Raised when a store operation fails unexpectedly.

    The message returned to the client is always generic; the context
    (operation, original exception type) is logged server-side only.
    """

    kind = ErrorKind.STORE

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
