"""
Pydantic schemas for inquiry responses.
"""

from typing import List
from datetime import datetime
from app.models.inquiry import InquiryStatus
from app.schemas.common import CamelModel, ListMeta


class InquiryResponse(CamelModel):
    """Schema for inquiry response data."""

    id: int
    property_id: int
    name: str
    email: str
    phone: str
    message: str
    status: InquiryStatus = InquiryStatus.NEW
    created_at: datetime


class InquiryEnvelope(CamelModel):
    inquiry: InquiryResponse
    message: str


class InquiryListResponse(ListMeta):
    inquiries: List[InquiryResponse]
