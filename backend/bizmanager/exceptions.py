"""
Business Manager Backend — Custom Exception Hierarchy
=====================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    BizManagerError (base)
    ├── ValidationError     → 400 Bad Request (client can fix)
    ├── AccessDeniedError   → 403 Forbidden (role / shop mismatch)
    ├── NotFoundError       → 404 Not Found
    ├── ConflictError       → 409 Conflict (duplicate shop name)
    └── DatabaseError       → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class BizManagerError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; returned only where the
                  handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BizManagerError):
    """
    Raised when client input fails a business validation rule.

    HTTP:    400 Bad Request
    When:    Missing required fields, duplicate email or product, paying an
             already-paid salary entry, assigning a non-transporter.
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


class AccessDeniedError(BizManagerError):
    """
    Raised when the caller's role or shop does not grant access.

    HTTP:    403 Forbidden
    When:    A non-owner reads another shop's employee, or a salary payment
             names a shop the employee does not belong to.
    """

    def __init__(
        self,
        message: str = "Access denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BizManagerError):
    """
    Raised when a requested or referenced resource does not exist.

    HTTP:    404 Not Found

    The message keeps the short "<Resource> not found" form clients match on.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(BizManagerError):
    """
    Raised when a create would duplicate a uniquely-named resource.

    HTTP:    409 Conflict

    `payload` is merged into the top level of the response body so clients
    can read flags such as `shopExists` directly.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        payload: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.payload = payload or {}


class DatabaseError(BizManagerError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver details
    are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
