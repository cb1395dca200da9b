"""
API route handlers for the Property Marketplace API.
"""

from .properties import router as properties_router
from .orders import router as orders_router
from .inquiries import router as inquiries_router
from .favorites import router as favorites_router
from .cart import router as cart_router

__all__ = [
    "properties_router",
    "orders_router",
    "inquiries_router",
    "favorites_router",
    "cart_router",
]
