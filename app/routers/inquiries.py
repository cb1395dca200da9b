"""
Inquiry API endpoints.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Optional, Union

from app.models.inquiry import InquiryStatus
from app.services.inquiry import InquiryService
from app.schemas.common import MessageResponse
from app.schemas.inquiry import InquiryResponse, InquiryEnvelope, InquiryListResponse
from app.schemas.error import get_crud_error_responses, get_common_error_responses
from app.utils.dependencies import get_inquiry_service
from app.utils.query_params import Pagination, QueryParser, get_pagination


router = APIRouter(prefix="/inquiries", tags=["Inquiries"])


def _envelope(inquiry, message: str) -> InquiryEnvelope:
    return InquiryEnvelope(inquiry=InquiryResponse.model_validate(inquiry), message=message)


@router.get(
    "",
    response_model=Union[InquiryListResponse, InquiryEnvelope],
    summary="List inquiries",
    description="Get a page of inquiries, newest first, or a single inquiry when id is given.",
    responses=get_common_error_responses()
)
async def list_inquiries(
    id: Optional[str] = Query(None, description="Return only this inquiry"),
    status_filter: Optional[str] = Query(None, alias="status", description="Inquiry status"),
    property_id: Optional[str] = Query(None, alias="propertyId", description="Listing id"),
    pagination: Pagination = Depends(get_pagination),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> Union[InquiryListResponse, InquiryEnvelope]:
    if QueryParser.string(id) is not None:
        inquiry = await inquiry_service.get_inquiry(QueryParser.record_id(id))
        return _envelope(inquiry, "Inquiry retrieved successfully")

    inquiries, total_count = await inquiry_service.list_inquiries(
        pagination,
        status=QueryParser.choice(status_filter, "status", InquiryStatus, allow_all=True),
        property_id=QueryParser.integer(property_id, "propertyId", minimum=1)
    )

    return InquiryListResponse(
        inquiries=[InquiryResponse.model_validate(i) for i in inquiries],
        count=total_count,
        limit=pagination.limit,
        offset=pagination.offset,
        message="Inquiries retrieved successfully"
    )


@router.post(
    "",
    response_model=InquiryEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Submit inquiry",
    description="Submit a contact message about a listing.",
    responses=get_crud_error_responses()
)
async def create_inquiry(
    body: Any = Body(None),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryEnvelope:
    inquiry = await inquiry_service.create_inquiry(body)
    return _envelope(inquiry, "Inquiry submitted successfully")


@router.put(
    "",
    response_model=InquiryEnvelope,
    summary="Update inquiry",
    responses=get_crud_error_responses()
)
async def update_inquiry(
    id: Optional[str] = Query(None, description="Inquiry id"),
    body: Any = Body(None),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryEnvelope:
    inquiry = await inquiry_service.update_inquiry(QueryParser.record_id(id), body)
    return _envelope(inquiry, "Inquiry updated successfully")


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete inquiry",
    responses=get_common_error_responses()
)
async def delete_inquiry(
    id: Optional[str] = Query(None, description="Inquiry id"),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> MessageResponse:
    await inquiry_service.delete_inquiry(QueryParser.record_id(id))
    return MessageResponse(message="Inquiry deleted successfully")
