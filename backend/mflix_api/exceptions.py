"""
Mflix API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the error outcomes of a request.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the `{status, message, error | errors}` envelope with the
       matching HTTP status code.
Who:   Raised by services and id parsing; caught by global handlers.

Exception Hierarchy:
    MflixError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    │   └── InvalidIdError       → 400 Bad Request (malformed ObjectId)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class MflixError(Exception):
    """
    Base exception for all Mflix API errors.

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


class ValidationError(MflixError):
    """
    Raised when client input fails validation.

    HTTP:    400 Bad Request

    Example response:
        {
            "status": 400,
            "message": "Validation error",
            "errors": [{"code": "missing", "path": ["title"], "message": "Field required"}]
        }
    """

    def __init__(
        self,
        message: str = "Validation error",
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors or []


class InvalidIdError(ValidationError):
    """
    Raised when a path identifier is not a 24-character hex ObjectId.

    HTTP:    400 Bad Request

    Example response:
        {"status": 400, "message": "Invalid movie ID", "error": "ID format is incorrect"}
    """

    error = "ID format is incorrect"

    def __init__(
        self,
        message: str = "Invalid ID",
        value: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if value is not None:
            ctx["value"] = value
        super().__init__(message=message, context=ctx)


class NotFoundError(MflixError):
    """
    Raised when a requested document does not exist.

    HTTP:    404 Not Found

    `detail` becomes the envelope's `error` field when set, e.g.
    {"status": 404, "message": "Movie not found", "error": "No movie found with the given ID"}
    """

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.detail = detail


class DatabaseError(MflixError):
    """
    Raised when a MongoDB operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The driver exception is logged server-side; only `message` reaches the
    client as the envelope's `error` field.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
