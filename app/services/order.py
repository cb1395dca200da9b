"""
Order service for checkout requests.
"""

from typing import Any, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import utc_now, next_timestamp
from app.repositories.order import OrderRepository
from app.models.order import Order, InquiryType, OrderStatus
from app.services.property import PropertyService
from app.utils.query_params import Pagination
from app.utils.validators import FieldRule, ValidationUtils, choice_of, validate_payload
from app.utils.exceptions import APIException, InternalServerError, OrderNotFoundError
import logging

logger = logging.getLogger(__name__)


ORDER_FIELDS = (
    FieldRule("propertyId", "property_id", "Property ID", ValidationUtils.validate_id),
    FieldRule("buyerName", "buyer_name", "Buyer name", ValidationUtils.validate_string),
    FieldRule("buyerEmail", "buyer_email", "Buyer email", ValidationUtils.validate_email_address),
    FieldRule("buyerPhone", "buyer_phone", "Buyer phone", ValidationUtils.validate_string),
    FieldRule("buyerAddress", "buyer_address", "Buyer address", ValidationUtils.validate_string),
    FieldRule("buyerCity", "buyer_city", "Buyer city", ValidationUtils.validate_string),
    FieldRule("buyerState", "buyer_state", "Buyer state", ValidationUtils.validate_string),
    FieldRule("buyerZipCode", "buyer_zip_code", "Buyer zip code", ValidationUtils.validate_string),
    FieldRule("inquiryType", "inquiry_type", "Inquiry type", choice_of(InquiryType)),
    FieldRule(
        "preferredContactTime", "preferred_contact_time", "Preferred contact time",
        ValidationUtils.validate_string
    ),
    FieldRule("totalValue", "total_value", "Total value", ValidationUtils.validate_positive_number),
    FieldRule(
        "additionalNotes", "additional_notes", "Additional notes", ValidationUtils.validate_optional_string,
        required=False, nullable=True
    ),
    FieldRule(
        "orderStatus", "order_status", "Order status", choice_of(OrderStatus),
        required=False, default=lambda: OrderStatus.PENDING
    ),
)


class OrderService:
    """
    Order service: buyer requests created at checkout and triaged by admins.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.order_repo = OrderRepository(db_session)
        self.property_service = PropertyService(db_session)

    async def list_orders(
        self,
        pagination: Pagination,
        status: Optional[OrderStatus] = None,
        property_id: Optional[int] = None
    ) -> Tuple[List[Order], int]:
        try:
            return await self.order_repo.list_orders(
                status=status,
                property_id=property_id,
                skip=pagination.offset,
                limit=pagination.limit
            )
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to list orders: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def get_order(self, order_id: int) -> Order:
        """
        Get order by ID.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        try:
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(order_id)
            return order
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to get order {order_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def create_order(self, body: Any) -> Order:
        """
        Create an order for an existing listing.

        Args:
            body: Decoded JSON request body

        Returns:
            Created order instance

        Raises:
            ValidationError: If a field is missing or malformed
            PropertyNotFoundError: If the referenced listing doesn't exist
        """
        try:
            data = validate_payload(body, ORDER_FIELDS)
            await self.property_service.ensure_exists(data["property_id"])

            now = utc_now()
            data["created_at"] = now
            data["updated_at"] = now

            order = await self.order_repo.create(data)

            logger.info(f"Order created: {order.id} for property {order.property_id} ({order.inquiry_type.value})")
            return order
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create order: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def update_order(self, order_id: int, body: Any) -> Order:
        """
        Apply a partial update to an order, typically a status change.

        Raises:
            OrderNotFoundError: If order doesn't exist
            ValidationError: If a supplied field is malformed or nothing is supplied
            PropertyNotFoundError: If propertyId is changed to a missing listing
        """
        try:
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            data = validate_payload(body, ORDER_FIELDS, partial=True)
            if "property_id" in data and data["property_id"] != order.property_id:
                await self.property_service.ensure_exists(data["property_id"])

            data["updated_at"] = next_timestamp(order.updated_at)
            order = await self.order_repo.update(order, data)

            logger.info(f"Order updated: {order_id} (status: {order.order_status.value})")
            return order
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update order {order_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def delete_order(self, order_id: int) -> None:
        """
        Delete an order.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        try:
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            await self.order_repo.delete(order)
            logger.info(f"Order deleted: {order_id}")
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to delete order {order_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")
