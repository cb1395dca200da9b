"""
Property service for managing listings.
Handles validation, search and the create/update/delete lifecycle of a listing.
"""

from typing import Any, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import utc_now, next_timestamp
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.models.property import Property, PropertyType, PropertyStatus
from app.utils.query_params import Pagination
from app.utils.validators import FieldRule, ValidationUtils, choice_of, validate_payload
from app.utils.exceptions import APIException, InternalServerError, PropertyNotFoundError
import logging

logger = logging.getLogger(__name__)


PROPERTY_FIELDS = (
    FieldRule("title", "title", "Title", ValidationUtils.validate_string),
    FieldRule("description", "description", "Description", ValidationUtils.validate_string),
    FieldRule("price", "price", "Price", ValidationUtils.validate_positive_big_int),
    FieldRule("location", "location", "Location", ValidationUtils.validate_string),
    FieldRule("type", "type", "Type", choice_of(PropertyType)),
    FieldRule("bedrooms", "bedrooms", "Bedrooms", ValidationUtils.validate_positive_int),
    FieldRule("bathrooms", "bathrooms", "Bathrooms", ValidationUtils.validate_positive_int),
    FieldRule("area", "area", "Area", ValidationUtils.validate_positive_big_int),
    FieldRule("images", "images", "Images", ValidationUtils.validate_string_list),
    FieldRule("amenities", "amenities", "Amenities", ValidationUtils.validate_string_list),
    FieldRule("yearBuilt", "year_built", "Year built", ValidationUtils.validate_positive_int),
    FieldRule(
        "featured", "featured", "Featured", ValidationUtils.validate_boolean,
        required=False, default=lambda: False
    ),
    FieldRule(
        "status", "status", "Status", choice_of(PropertyStatus),
        required=False, default=lambda: PropertyStatus.AVAILABLE
    ),
)


class PropertyService:
    """
    Property service for listing management and search.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)

    async def list_properties(
        self,
        filters: PropertySearchFilters,
        pagination: Pagination
    ) -> Tuple[List[Property], int]:
        """
        Search listings.

        Args:
            filters: Parsed search filters, combined with AND
            pagination: Page window

        Returns:
            Tuple of (page of properties, total matching count)
        """
        try:
            return await self.property_repo.search_properties(
                filters,
                skip=pagination.offset,
                limit=pagination.limit
            )
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to search properties: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def get_property(self, property_id: int) -> Property:
        """
        Get property by ID.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        try:
            property_obj = await self.property_repo.get_by_id(property_id)
            if not property_obj:
                raise PropertyNotFoundError(property_id)
            return property_obj
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to get property {property_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def create_property(self, body: Any) -> Property:
        """
        Create a new listing.

        Args:
            body: Decoded JSON request body

        Returns:
            Created property instance

        Raises:
            ValidationError: If a field is missing or malformed
        """
        try:
            data = validate_payload(body, PROPERTY_FIELDS)
            now = utc_now()
            data["created_at"] = now
            data["updated_at"] = now

            property_obj = await self.property_repo.create(data)

            logger.info(f"Property created: {property_obj.title} (ID: {property_obj.id})")
            return property_obj
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create property: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def update_property(self, property_id: int, body: Any) -> Property:
        """
        Apply a partial update to a listing.

        Only fields present in the body are validated and written; updated_at
        always moves forward.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            ValidationError: If a supplied field is malformed or nothing is supplied
        """
        try:
            property_obj = await self.property_repo.get_by_id(property_id)
            if not property_obj:
                raise PropertyNotFoundError(property_id)

            data = validate_payload(body, PROPERTY_FIELDS, partial=True)
            data["updated_at"] = next_timestamp(property_obj.updated_at)

            property_obj = await self.property_repo.update(property_obj, data)

            logger.info(f"Property updated: {property_id} ({', '.join(sorted(data))})")
            return property_obj
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update property {property_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def delete_property(self, property_id: int) -> Property:
        """
        Delete a listing together with its orders, favorites, cart items and inquiries.

        Returns:
            The deleted property instance

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        try:
            property_obj = await self.property_repo.get_by_id(property_id)
            if not property_obj:
                raise PropertyNotFoundError(property_id)

            await self.property_repo.delete(property_obj)

            logger.info(f"Property deleted: {property_id}")
            return property_obj
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to delete property {property_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def ensure_exists(self, property_id: int) -> None:
        """
        Check that a referenced listing exists.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(property_id)
