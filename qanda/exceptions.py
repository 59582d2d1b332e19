"""
Q&A Backend: Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the three failure classes a
       request can end in.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers (registered in main.py) turn them into JSON
       error responses with the matching HTTP status.
Who:   Raised by validators, existence guards and services.

Exception Hierarchy:
    QandaError (base)
    ├── ValidationError   → 400 Bad Request (malformed, missing or out-of-range input)
    ├── NotFoundError     → 404 Not Found (referenced question/answer absent)
    └── DatabaseError     → 500 Internal Server Error (any store failure)

Raising instead of returning error values lets a failing step end the
request without every caller checking a result.
"""

from typing import Any, Dict, Optional


class QandaError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where a handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(QandaError):
    """
    Raised when client input fails validation.

    When:    Missing question fields, answer content too long, vote not 1/-1,
             bad search parameters, malformed path ids.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Content must not exceed 300 characters.",
            "details": {"field": "content", "max_length": 300},
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        message: str = "Invalid request data.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(QandaError):
    """
    Raised when a referenced question or answer does not exist.

    When:    Existence guard finds zero rows, or an UPDATE/DELETE keyed by
             primary key affects zero rows.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(QandaError):
    """
    Raised when a statement against the store fails.

    HTTP:    500 Internal Server Error

    The message is generic. The driver's error text travels in
    context["store_error"] and is logged server-side; it reaches the client
    only when settings.expose_store_errors is on. Failed statements are
    never retried here.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    @classmethod
    def from_store_error(cls, message: str, error: Exception, **context: Any) -> "DatabaseError":
        """Wraps a driver/SQLAlchemy exception, keeping its text for logs."""
        context["store_error"] = str(error)
        return cls(message=message, context=context)
