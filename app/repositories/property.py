"""
Property repository for managing listings with search and filtering.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_
from app.repositories.base import BaseRepository
from app.models.property import Property, PropertyType, PropertyStatus
from dataclasses import dataclass
from typing import Optional, List, Tuple
import logging

logger = logging.getLogger(__name__)


def _contains(text: str) -> str:
    """ILIKE pattern matching text literally anywhere; % and _ in user input are escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass
class PropertySearchFilters:
    """Data class for property search filters. None means 'do not filter'."""

    search: Optional[str] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    location: Optional[str] = None
    property_type: Optional[PropertyType] = None
    min_bedrooms: Optional[int] = None
    min_bathrooms: Optional[int] = None
    status: Optional[PropertyStatus] = None
    featured: Optional[bool] = None


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for listings with filtered, paginated search.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def search_properties(
        self,
        filters: PropertySearchFilters,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Property], int]:
        """
        Search properties with filtering and pagination.

        Args:
            filters: PropertySearchFilters instance with search criteria
            skip: Number of records to skip for pagination
            limit: Maximum number of records to return

        Returns:
            Tuple of (properties list, total count)
        """
        conditions = self._build_filter_conditions(filters)
        properties, total_count = await self.list_page(conditions, skip=skip, limit=limit)
        logger.debug(f"Property search returned {len(properties)} of {total_count} total results")
        return properties, total_count

    def _build_filter_conditions(self, filters: PropertySearchFilters) -> List:
        """
        Build SQLAlchemy filter conditions from search filters.

        Args:
            filters: PropertySearchFilters instance

        Returns:
            List of SQLAlchemy conditions, combined with AND by the caller
        """
        conditions = []

        # Text search across title, description and location
        if filters.search:
            search_term = _contains(filters.search)
            conditions.append(
                or_(
                    Property.title.ilike(search_term, escape="\\"),
                    Property.description.ilike(search_term, escape="\\"),
                    Property.location.ilike(search_term, escape="\\")
                )
            )

        # Price range filters
        if filters.min_price is not None:
            conditions.append(Property.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Property.price <= filters.max_price)

        # Location filter (case-insensitive partial match)
        if filters.location:
            conditions.append(Property.location.ilike(_contains(filters.location), escape="\\"))

        if filters.property_type is not None:
            conditions.append(Property.type == filters.property_type)

        if filters.min_bedrooms is not None:
            conditions.append(Property.bedrooms >= filters.min_bedrooms)
        if filters.min_bathrooms is not None:
            conditions.append(Property.bathrooms >= filters.min_bathrooms)

        if filters.status is not None:
            conditions.append(Property.status == filters.status)

        if filters.featured is not None:
            conditions.append(Property.featured == filters.featured)

        return conditions

