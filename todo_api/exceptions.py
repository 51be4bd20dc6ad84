"""
Todo API - Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the request gate and repositories.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the validated request gate and by repository backends.

Exception Hierarchy:
    TodoApiError (base)
    ├── MalformedBodyError       → 400 Bad Request
    ├── ValidationFailedError    → 422 Unprocessable Entity
    └── RepositoryError          → 404 Not Found (backend failure)
        └── NotFoundError        → 404 Not Found (no entity with that id)

Backend failures and genuine absence share one HTTP outcome: handlers only
see RepositoryError and the cause is kept in `context` for the logs.
"""

from typing import Any, Dict, List, Optional


class TodoApiError(Exception):
    """
    Base exception for all application errors.

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


class MalformedBodyError(TodoApiError):
    """
    Raised when a request body cannot be read as the expected payload shape.

    When:    Invalid JSON, a non-object body, a missing required field or a
             field of the wrong JSON type.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Request body is not valid JSON for this endpoint",
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.errors = errors or []


class ValidationFailedError(TodoApiError):
    """
    Raised when a parsed payload violates one or more field constraints.

    HTTP:    422 Unprocessable Entity

    Example response:
        {
            "error": "validation_failed",
            "message": "Request body failed validation",
            "details": {"violations": [
                {"field": "text", "constraint": "string_too_short",
                 "message": "String should have at least 1 character"}
            ]}
        }
    """

    def __init__(
        self,
        violations: List[Dict[str, Any]],
        message: str = "Request body failed validation",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["violations"] = violations
        super().__init__(message=message, context=ctx)
        self.violations = violations


class RepositoryError(TodoApiError):
    """
    Raised when a repository backend cannot complete an operation.

    When:    The database is unreachable, a statement fails, etc.
    HTTP:    404 Not Found, same response as NotFoundError
    """

    def __init__(
        self,
        resource: str = "resource",
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(
            message=message or f"The {resource} store could not complete the operation",
            context=ctx,
        )
        self.resource = resource


class NotFoundError(RepositoryError):
    """
    Raised when no entity with the requested id exists.

    When:    find/update/delete with an id the store never assigned or
             already deleted.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(resource=resource, message=message, context=ctx)
        self.resource_id = resource_id
