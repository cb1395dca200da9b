"""
Pydantic schemas for favorite and cart responses.
Both resources share the (userIdentifier, propertyId) shape.
"""

from typing import List
from datetime import datetime
from app.schemas.common import CamelModel, ListMeta


class FavoriteResponse(CamelModel):
    """Schema for favorite response data."""

    id: int
    user_identifier: str
    property_id: int
    created_at: datetime


class FavoriteEnvelope(CamelModel):
    favorite: FavoriteResponse
    message: str


class FavoriteListResponse(ListMeta):
    favorites: List[FavoriteResponse]


class CartItemResponse(CamelModel):
    """Schema for cart item response data."""

    id: int
    user_identifier: str
    property_id: int
    created_at: datetime


class CartItemEnvelope(CamelModel):
    cart_item: CartItemResponse
    message: str


class CartItemListResponse(ListMeta):
    cart_items: List[CartItemResponse]


class CartClearResponse(CamelModel):
    """Result of emptying a cart."""

    deleted_count: int
    message: str
