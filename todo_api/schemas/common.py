"""
Todo API - Shared Schema Definitions
======================================

What:  Constants and models used by more than one resource.
"""

from typing import Optional

from pydantic import BaseModel, Field


# Upper bound for every user-supplied string (todo text, label name)
TEXT_MAX_LENGTH = 100


class ErrorResponse(BaseModel):
    """
    Standardized error body returned by every exception handler.

    Example:
        {
            "error": "validation_failed",
            "message": "Request body failed validation",
            "details": {"violations": [{"field": "text", ...}]},
            "request_id": "1f0c9a2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
