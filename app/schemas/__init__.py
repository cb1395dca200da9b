"""
Pydantic schemas for API responses.
"""

from .common import CamelModel, MessageResponse, ListMeta
from .error import ErrorResponse
from .property import PropertyResponse, PropertyEnvelope, PropertyListResponse
from .order import OrderResponse, OrderEnvelope, OrderListResponse
from .inquiry import InquiryResponse, InquiryEnvelope, InquiryListResponse
from .favorite import (
    FavoriteResponse,
    FavoriteEnvelope,
    FavoriteListResponse,
    CartItemResponse,
    CartItemEnvelope,
    CartItemListResponse,
    CartClearResponse
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    "ListMeta",
    "ErrorResponse",
    "PropertyResponse",
    "PropertyEnvelope",
    "PropertyListResponse",
    "OrderResponse",
    "OrderEnvelope",
    "OrderListResponse",
    "InquiryResponse",
    "InquiryEnvelope",
    "InquiryListResponse",
    "FavoriteResponse",
    "FavoriteEnvelope",
    "FavoriteListResponse",
    "CartItemResponse",
    "CartItemEnvelope",
    "CartItemListResponse",
    "CartClearResponse",
]
