"""
FastAPI dependency injection utilities.
Provides per-request service instances bound to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.services.property import PropertyService
from app.services.order import OrderService
from app.services.inquiry import InquiryService
from app.services.favorite import FavoriteService
from app.services.cart import CartService


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    """Get order service instance."""
    return OrderService(db)


async def get_inquiry_service(db: AsyncSession = Depends(get_db)) -> InquiryService:
    """Get inquiry service instance."""
    return InquiryService(db)


async def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    """Get favorite service instance."""
    return FavoriteService(db)


async def get_cart_service(db: AsyncSession = Depends(get_db)) -> CartService:
    """Get cart service instance."""
    return CartService(db)
