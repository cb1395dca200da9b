"""
Inquiry service for contact messages about a listing.
"""

from typing import Any, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import utc_now
from app.repositories.inquiry import InquiryRepository
from app.models.inquiry import Inquiry, InquiryStatus
from app.services.property import PropertyService
from app.utils.query_params import Pagination
from app.utils.validators import FieldRule, ValidationUtils, choice_of, validate_payload
from app.utils.exceptions import APIException, InternalServerError, InquiryNotFoundError
import logging

logger = logging.getLogger(__name__)


INQUIRY_FIELDS = (
    FieldRule("propertyId", "property_id", "propertyId", ValidationUtils.validate_id),
    FieldRule("name", "name", "name", ValidationUtils.validate_string),
    FieldRule("email", "email", "email", ValidationUtils.validate_email_address),
    FieldRule("phone", "phone", "phone", ValidationUtils.validate_string),
    FieldRule("message", "message", "message", ValidationUtils.validate_string),
    FieldRule(
        "status", "status", "status", choice_of(InquiryStatus),
        required=False, default=lambda: InquiryStatus.NEW
    ),
)


class InquiryService:
    """Inquiry service. Inquiries have no updated_at; updates only change fields."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.inquiry_repo = InquiryRepository(db_session)
        self.property_service = PropertyService(db_session)

    async def list_inquiries(
        self,
        pagination: Pagination,
        status: Optional[InquiryStatus] = None,
        property_id: Optional[int] = None
    ) -> Tuple[List[Inquiry], int]:
        try:
            return await self.inquiry_repo.list_inquiries(
                status=status,
                property_id=property_id,
                skip=pagination.offset,
                limit=pagination.limit
            )
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to list inquiries: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def get_inquiry(self, inquiry_id: int) -> Inquiry:
        try:
            inquiry = await self.inquiry_repo.get_by_id(inquiry_id)
            if not inquiry:
                raise InquiryNotFoundError(inquiry_id)
            return inquiry
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to get inquiry {inquiry_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def create_inquiry(self, body: Any) -> Inquiry:
        """
        Submit an inquiry about an existing listing.

        Raises:
            ValidationError: If a field is missing or malformed
            PropertyNotFoundError: If the referenced listing doesn't exist
        """
        try:
            data = validate_payload(body, INQUIRY_FIELDS)
            await self.property_service.ensure_exists(data["property_id"])
            data["created_at"] = utc_now()

            inquiry = await self.inquiry_repo.create(data)

            logger.info(f"Inquiry submitted: {inquiry.id} for property {inquiry.property_id}")
            return inquiry
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create inquiry: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def update_inquiry(self, inquiry_id: int, body: Any) -> Inquiry:
        """
        Apply a partial update to an inquiry, typically a status change.

        Raises:
            InquiryNotFoundError: If inquiry doesn't exist
            ValidationError: If a supplied field is malformed or nothing is supplied
            PropertyNotFoundError: If propertyId is changed to a missing listing
        """
        try:
            inquiry = await self.inquiry_repo.get_by_id(inquiry_id)
            if not inquiry:
                raise InquiryNotFoundError(inquiry_id)

            data = validate_payload(body, INQUIRY_FIELDS, partial=True)
            if "property_id" in data and data["property_id"] != inquiry.property_id:
                await self.property_service.ensure_exists(data["property_id"])

            inquiry = await self.inquiry_repo.update(inquiry, data)

            logger.info(f"Inquiry updated: {inquiry_id} (status: {inquiry.status.value})")
            return inquiry
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update inquiry {inquiry_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")

    async def delete_inquiry(self, inquiry_id: int) -> None:
        try:
            inquiry = await self.inquiry_repo.get_by_id(inquiry_id)
            if not inquiry:
                raise InquiryNotFoundError(inquiry_id)

            await self.inquiry_repo.delete(inquiry)
            logger.info(f"Inquiry deleted: {inquiry_id}")
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to delete inquiry {inquiry_id}: {e}", exc_info=True)
            raise InternalServerError(f"Internal server error: {e}")
