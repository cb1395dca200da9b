"""
Custom exception classes for the Property Marketplace API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """
    A single field or parameter failed validation.

    The error code names the field, e.g. MISSING_TITLE or INVALID_PRICE.
    """

    def __init__(self, error_code: str, detail: str, field: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )
        self.field = field


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[Any] = None, error_code: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id is not None:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code or f"{resource.upper().replace(' ', '_')}_NOT_FOUND"
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )


class DuplicateResourceError(ConflictError):
    """A uniqueness rule would be violated by the write."""

    def __init__(self, detail: str, error_code: str = "DUPLICATE"):
        super().__init__(detail, error_code=error_code)


class InternalServerError(APIException):
    """Internal server error exception."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="INTERNAL_ERROR"
        )


class PropertyNotFoundError(NotFoundError):
    """Property not found exception."""

    def __init__(self, property_id: Any):
        super().__init__("Property", property_id, error_code="PROPERTY_NOT_FOUND")


class OrderNotFoundError(NotFoundError):
    """Order not found exception."""

    def __init__(self, order_id: Any):
        super().__init__("Order", order_id, error_code="ORDER_NOT_FOUND")


class InquiryNotFoundError(NotFoundError):
    """Inquiry not found exception."""

    def __init__(self, inquiry_id: Any):
        super().__init__("Inquiry", inquiry_id, error_code="INQUIRY_NOT_FOUND")


class FavoriteNotFoundError(NotFoundError):
    """No favorite links the user to the property."""

    def __init__(self):
        super().__init__("Favorite", error_code="FAVORITE_NOT_FOUND")


class CartItemNotFoundError(NotFoundError):
    """The property is not in the user's cart."""

    def __init__(self):
        super().__init__("Cart item", error_code="CART_ITEM_NOT_FOUND")


class NoUpdatesError(ValidationError):
    """An update request carried no recognised fields."""

    def __init__(self):
        super().__init__("NO_UPDATES", "No valid fields to update")
