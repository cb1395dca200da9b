"""
Inquiry repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.inquiry import Inquiry, InquiryStatus
from typing import Optional, List, Tuple


class InquiryRepository(BaseRepository[Inquiry]):
    """Repository for contact messages; lists are newest first."""

    def __init__(self, db: AsyncSession):
        super().__init__(Inquiry, db)

    async def list_inquiries(
        self,
        status: Optional[InquiryStatus] = None,
        property_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Inquiry], int]:
        conditions = []
        if status is not None:
            conditions.append(Inquiry.status == status)
        if property_id is not None:
            conditions.append(Inquiry.property_id == property_id)

        return await self.list_page(conditions, skip=skip, limit=limit)
