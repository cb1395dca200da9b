"""
Favorite service: per-user bookmarked listings.
"""

from typing import Any, List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import utc_now
from app.repositories.favorite import FavoriteRepository
from app.models.favorite import Favorite
from app.services.property import PropertyService
from app.utils.query_params import Pagination
from app.utils.validators import FieldRule, ValidationUtils, validate_payload
from app.utils.exceptions import (
    APIException,
    DuplicateResourceError,
    FavoriteNotFoundError,
    InternalServerError
)
import logging

logger = logging.getLogger(__name__)


FAVORITE_FIELDS = (
    FieldRule("userIdentifier", "user_identifier", "userIdentifier", ValidationUtils.validate_string),
    FieldRule("propertyId", "property_id", "propertyId", ValidationUtils.validate_id),
)


def _duplicate() -> DuplicateResourceError:
    return DuplicateResourceError("Property is already in favorites", error_code="DUPLICATE_FAVORITE")


class FavoriteService:
    """
    Favorite service. A user can favorite a listing at most once.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.favorite_repo = FavoriteRepository(db_session)
        self.property_service = PropertyService(db_session)

    async def list_favorites(
        self,
        user_identifier: str,
        pagination: Pagination,
        property_id: Optional[int] = None
    ) -> Tuple[List[Favorite], int]:
        """
        List a user's favorites in the order they were added.

        Returns:
            Tuple of (page of favorites, total count)
        """
        try:
            return await self.favorite_repo.list_for_user(
                user_identifier,
                property_id=property_id,
                skip=pagination.offset,
                limit=pagination.limit
            )
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to list favorites for {user_identifier}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def add_favorite(self, body: Any) -> Favorite:
        """
        Add a listing to a user's favorites.

        Raises:
            ValidationError: If userIdentifier or propertyId is missing or malformed
            PropertyNotFoundError: If the listing doesn't exist
            DuplicateResourceError: If the listing is already a favorite (DUPLICATE_FAVORITE)
        """
        try:
            data = validate_payload(body, FAVORITE_FIELDS)
            await self.property_service.ensure_exists(data["property_id"])

            if await self.favorite_repo.get_for_user(data["user_identifier"], data["property_id"]):
                raise _duplicate()

            data["created_at"] = utc_now()
            favorite = await self.favorite_repo.create(data)

            logger.info(f"Favorite added: property {favorite.property_id} for {favorite.user_identifier}")
            return favorite
        except APIException:
            raise
        except IntegrityError:
            # Lost a race against a concurrent insert of the same pair
            raise _duplicate()
        except Exception as e:
            logger.error(f"Failed to add favorite: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def remove_favorite(self, user_identifier: str, property_id: int) -> None:
        """
        Remove a listing from a user's favorites.

        Raises:
            FavoriteNotFoundError: If the listing is not a favorite of the user
        """
        try:
            favorite = await self.favorite_repo.get_for_user(user_identifier, property_id)
            if not favorite:
                raise FavoriteNotFoundError()

            await self.favorite_repo.delete(favorite)
            logger.info(f"Favorite removed: property {property_id} for {user_identifier}")
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to remove favorite: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")
