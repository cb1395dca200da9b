"""
Utility modules for the Property Marketplace API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    BadRequestError,
    NotFoundError,
    ConflictError,
    DuplicateResourceError,
    InternalServerError,
    NoUpdatesError,
    PropertyNotFoundError,
    OrderNotFoundError,
    InquiryNotFoundError,
    FavoriteNotFoundError,
    CartItemNotFoundError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "BadRequestError",
    "NotFoundError",
    "ConflictError",
    "DuplicateResourceError",
    "InternalServerError",
    "NoUpdatesError",
    "PropertyNotFoundError",
    "OrderNotFoundError",
    "InquiryNotFoundError",
    "FavoriteNotFoundError",
    "CartItemNotFoundError",
]
