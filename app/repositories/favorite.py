"""
Favorite repository keyed by (user identifier, property).
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.favorite import Favorite
from typing import Any, Optional, List, Tuple
import logging

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):
    """
    Repository for favorites. A user's favorites are listed in the order
    they were added.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    def default_ordering(self) -> List[Any]:
        return [Favorite.created_at.asc(), Favorite.id.asc()]

    async def list_for_user(
        self,
        user_identifier: str,
        property_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Favorite], int]:
        """
        List one user's favorites, optionally narrowed to a single property.

        Returns:
            Tuple of (favorites list, total count)
        """
        conditions = [Favorite.user_identifier == user_identifier]
        if property_id is not None:
            conditions.append(Favorite.property_id == property_id)

        return await self.list_page(conditions, skip=skip, limit=limit)

    async def get_for_user(self, user_identifier: str, property_id: int) -> Optional[Favorite]:
        """Get the favorite linking a user to a property, if any."""
        return await self.get_by_fields(user_identifier=user_identifier, property_id=property_id)
