"""
Cart service: per-user shopping cart of listings.
"""

from typing import Any, List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import utc_now
from app.repositories.cart import CartRepository
from app.models.cart import CartItem
from app.services.property import PropertyService
from app.utils.query_params import Pagination
from app.utils.validators import FieldRule, ValidationUtils, validate_payload
from app.utils.exceptions import (
    APIException,
    CartItemNotFoundError,
    DuplicateResourceError,
    InternalServerError
)
import logging

logger = logging.getLogger(__name__)


CART_FIELDS = (
    FieldRule("userIdentifier", "user_identifier", "userIdentifier", ValidationUtils.validate_string),
    FieldRule("propertyId", "property_id", "propertyId", ValidationUtils.validate_id),
)


def _duplicate() -> DuplicateResourceError:
    return DuplicateResourceError("Property is already in cart", error_code="DUPLICATE_CART_ITEM")


class CartService:
    """
    Cart service. A listing appears at most once in a user's cart.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.cart_repo = CartRepository(db_session)
        self.property_service = PropertyService(db_session)

    async def list_cart(
        self,
        user_identifier: str,
        pagination: Pagination,
        property_id: Optional[int] = None
    ) -> Tuple[List[CartItem], int]:
        """
        List a user's cart items in the order they were added.

        Returns:
            Tuple of (page of cart items, total count)
        """
        try:
            return await self.cart_repo.list_for_user(
                user_identifier,
                property_id=property_id,
                skip=pagination.offset,
                limit=pagination.limit
            )
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to list cart for {user_identifier}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def add_to_cart(self, body: Any) -> CartItem:
        """
        Put a listing into a user's cart.

        Raises:
            ValidationError: If userIdentifier or propertyId is missing or malformed
            PropertyNotFoundError: If the listing doesn't exist
            DuplicateResourceError: If the listing is already in the cart (DUPLICATE_CART_ITEM)
        """
        try:
            data = validate_payload(body, CART_FIELDS)
            await self.property_service.ensure_exists(data["property_id"])

            if await self.cart_repo.get_for_user(data["user_identifier"], data["property_id"]):
                raise _duplicate()

            data["created_at"] = utc_now()
            cart_item = await self.cart_repo.create(data)

            logger.info(f"Cart item added: property {cart_item.property_id} for {cart_item.user_identifier}")
            return cart_item
        except APIException:
            raise
        except IntegrityError:
            # Lost a race against a concurrent insert of the same pair
            raise _duplicate()
        except Exception as e:
            logger.error(f"Failed to add cart item: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def remove_from_cart(self, user_identifier: str, property_id: int) -> None:
        """
        Take a listing out of a user's cart.

        Raises:
            CartItemNotFoundError: If the listing is not in the user's cart
        """
        try:
            cart_item = await self.cart_repo.get_for_user(user_identifier, property_id)
            if not cart_item:
                raise CartItemNotFoundError()

            await self.cart_repo.delete(cart_item)
            logger.info(f"Cart item removed: property {property_id} for {user_identifier}")
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to remove cart item: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def clear_cart(self, user_identifier: str) -> int:
        """
        Empty a user's cart.

        Returns:
            Number of cart items removed
        """
        try:
            deleted_count = await self.cart_repo.clear_for_user(user_identifier)
            logger.info(f"Cart cleared for {user_identifier}: {deleted_count} item(s) removed")
            return deleted_count
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to clear cart for {user_identifier}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")
