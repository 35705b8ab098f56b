"""
Listing API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions, one per error category.
How:   Services raise them; global handlers registered in main.py turn each
       one into a JSON error response with the matching status code.

Exception Hierarchy:
    ListingApiError (base)
    ├── ValidationError      → 422 Unprocessable Entity
    ├── BadRequestError      → 400 Bad Request
    ├── UnauthorizedError    → 401 Unauthorized
    ├── NotFoundError        → 404 Not Found
    └── StorageError         → 500 Internal Server Error

Anything else (record store failures included) is left to the catch-all
handler and becomes a generic 500.
"""

from typing import Any, Dict, Optional


class ListingApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Client-facing error description (returned in the response)
        context:  Additional debug info (logged; only some handlers return it)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ListingApiError):
    """
    Raised when input is well-formed but not acceptable.

    When:  A listing references a category, type or status that does not
           exist, or an uploaded photo has the wrong type or size.
    HTTP:  422, the same status FastAPI uses for schema validation, so
           clients handle one validation shape.

    Example response:
        {
            "error": "validation_error",
            "message": "The selected category_id is invalid.",
            "details": {"field": "category_id", "value": 99}
        }
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


class BadRequestError(ListingApiError):
    """Raised when a request is structurally valid but carries nothing to do."""

    def __init__(
        self,
        message: str = "Bad request",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(ListingApiError):
    """Raised when no caller identity can be established."""

    def __init__(
        self,
        message: str = "Unauthenticated.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ListingApiError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts
    that None into this exception so routes never check for it. The
    message is returned verbatim, e.g. "Listing not found".
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(ListingApiError):
    """
    Raised when the object store rejects a write or visibility change.

    HTTP:  500, generic message. Bucket names, keys and provider error
           codes stay in the server log.
    """

    def __init__(
        self,
        message: str = "Failed to store the uploaded photo. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
