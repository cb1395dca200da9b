"""
Error response schemas for API documentation.
Every failure is rendered as {"error": <message>, "code": <CODE>}.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    error: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Title is required"]
    )

    code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["MISSING_TITLE"]
    )


def _example(description: str, error: str, code: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": {"error": error, "code": code}
            }
        }
    }


COMMON_ERROR_RESPONSES = {
    400: _example("Bad Request - a field or parameter is missing or malformed", "Title is required", "MISSING_TITLE"),
    404: _example("Not Found - the addressed record does not exist", "Property not found with ID: 42", "PROPERTY_NOT_FOUND"),
    409: _example("Conflict - the record already exists", "Property is already in favorites", "DUPLICATE_FAVORITE"),
    500: _example("Internal Server Error", "Internal server error: connection refused", "INTERNAL_ERROR"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        *status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_common_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for read endpoints."""
    return get_error_responses(400, 404, 500)


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for write endpoints."""
    return get_error_responses(400, 404, 409, 500)
