"""
HealthTrack Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages. They replace generic Python
       exceptions that would leak internal details to the client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the auth dependency; caught by
       global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    HealthTrackError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── AuthError                → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    └── DatabaseError            → 500 Internal Server Error

None of these are retried: every failure is terminal for the request.
"""

from typing import Any, Dict, Optional


class HealthTrackError(Exception):
    """
    Base exception for all HealthTrack application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HealthTrackError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, future date of birth, empty questionnaire.
    HTTP:    400 Bad Request
    """

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


class AuthError(HealthTrackError):
    """
    Raised when credentials or a bearer token are rejected.

    When:    Wrong password, unknown email, missing/expired/forged token.
    HTTP:    401 Unauthorized

    Login failures always carry the same message so a caller cannot probe
    which emails are registered.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(HealthTrackError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown report ID or DLQ ID.
    HTTP:    404 Not Found

    SQLAlchemy returns None / empty results for missing rows; services
    convert that into this exception.
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(HealthTrackError):
    """
    Raised when a write collides with existing data.

    When:    Registering an email that already exists.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(HealthTrackError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, unexpected constraint violation, etc.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (SQL, constraint name, driver error) is logged
        server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
