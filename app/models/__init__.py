"""
Database models for the Property Marketplace API.
Includes Property, Order, Favorite, CartItem and Inquiry models.
"""

from app.models.property import Property, PropertyType, PropertyStatus
from app.models.order import Order, InquiryType, OrderStatus
from app.models.favorite import Favorite
from app.models.cart import CartItem
from app.models.inquiry import Inquiry, InquiryStatus

# Export all models for easy importing
__all__ = [
    "Property",
    "PropertyType",
    "PropertyStatus",
    "Order",
    "InquiryType",
    "OrderStatus",
    "Favorite",
    "CartItem",
    "Inquiry",
    "InquiryStatus",
]
