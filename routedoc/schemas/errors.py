"""
Routedoc — Error Response Schema
==================================

What:  Standardized error body for every error reply.
Who:   Built by the exception handlers in routedoc.main.

Example:
    {
        "error": "malformed_parameter",
        "message": "Parameter 'petId' in path must be an integer, got 'abc'",
        "details": {"parameter": "petId", "in": "path", "value": "abc", "expected": "an integer"},
        "request_id": "1f0c2a9b"
    }
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
