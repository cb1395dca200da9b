"""
Repository layer for data access operations.
Provides async database operations with filtering, counting and pagination.
"""

from app.repositories.base import BaseRepository
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.order import OrderRepository
from app.repositories.inquiry import InquiryRepository
from app.repositories.favorite import FavoriteRepository
from app.repositories.cart import CartRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "OrderRepository",
    "InquiryRepository",
    "FavoriteRepository",
    "CartRepository",
]
