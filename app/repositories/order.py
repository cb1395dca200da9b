"""
Order repository for checkout requests.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.order import Order, OrderStatus
from typing import Optional, List, Tuple
import logging

logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository[Order]):
    """Repository for orders, newest first."""

    def __init__(self, db: AsyncSession):
        super().__init__(Order, db)

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        property_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Order], int]:
        """
        List orders filtered by processing status and/or property.

        Returns:
            Tuple of (orders list, total count)
        """
        conditions = []
        if status is not None:
            conditions.append(Order.order_status == status)
        if property_id is not None:
            conditions.append(Order.property_id == property_id)

        return await self.list_page(conditions, skip=skip, limit=limit)
