"""
Cart repository keyed by (user identifier, property).
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.cart import CartItem
from typing import Any, Optional, List, Tuple
import logging

logger = logging.getLogger(__name__)


class CartRepository(BaseRepository[CartItem]):
    """
    Repository for cart items, listed in the order they were added.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(CartItem, db)

    def default_ordering(self) -> List[Any]:
        return [CartItem.created_at.asc(), CartItem.id.asc()]

    async def list_for_user(
        self,
        user_identifier: str,
        property_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[CartItem], int]:
        """
        List one user's cart, optionally narrowed to a single property.

        Returns:
            Tuple of (cart items list, total count)
        """
        conditions = [CartItem.user_identifier == user_identifier]
        if property_id is not None:
            conditions.append(CartItem.property_id == property_id)

        return await self.list_page(conditions, skip=skip, limit=limit)

    async def get_for_user(self, user_identifier: str, property_id: int) -> Optional[CartItem]:
        """Get the cart item linking a user to a property, if any."""
        return await self.get_by_fields(user_identifier=user_identifier, property_id=property_id)

    async def clear_for_user(self, user_identifier: str) -> int:
        """
        Remove every cart item of a user in a single statement.

        Returns:
            Number of items removed
        """
        deleted_count = await self.delete_where(user_identifier=user_identifier)
        logger.debug(f"Cleared {deleted_count} cart items for {user_identifier}")
        return deleted_count
