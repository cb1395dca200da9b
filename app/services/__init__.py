"""
Service layer for business logic implementation.
Contains one service per resource plus centralized error handling.
"""

from .property import PropertyService
from .order import OrderService
from .inquiry import InquiryService
from .favorite import FavoriteService
from .cart import CartService
from .error_handler import ErrorHandlerService

__all__ = [
    "PropertyService",
    "OrderService",
    "InquiryService",
    "FavoriteService",
    "CartService",
    "ErrorHandlerService"
]
