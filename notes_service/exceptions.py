"""
Notes Service — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the three failure classes the API
       distinguishes.
Why:   Services raise these without knowing about HTTP; global handlers
       registered in main.py turn them into `{"error": ...}` responses with the
       right status code.

Exception Hierarchy:
    NotesServiceError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotesServiceError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned as the `error` field)
        context:  Additional debug info (logged, NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesServiceError):
    """
    Raised when client input fails validation.

    When:    Title or content missing or empty on create/update.
    HTTP:    400 Bad Request; no storage call has been made.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class NotFoundError(NotesServiceError):
    """
    Raised when a requested note does not exist.

    When:    SELECT returned no row, or UPDATE/DELETE affected zero rows.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(NotesServiceError):
    """
    Raised when the storage backend fails.

    What:    Connectivity loss, constraint violation, pool timeout, etc.
    HTTP:    500 Internal Server Error

    The message is the driver's own error text; SQL statements and parameters
    stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
