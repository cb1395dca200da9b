"""
Pydantic schemas for order responses.
"""

from pydantic import Field
from typing import List, Optional
from datetime import datetime
from app.models.order import InquiryType, OrderStatus
from app.schemas.common import CamelModel, ListMeta


class OrderResponse(CamelModel):
    """Schema for order response data."""

    id: int
    property_id: int
    buyer_name: str
    buyer_email: str = Field(..., description="Lower-cased buyer email")
    buyer_phone: str
    buyer_address: str
    buyer_city: str
    buyer_state: str
    buyer_zip_code: str
    inquiry_type: InquiryType
    preferred_contact_time: str
    additional_notes: Optional[str] = None
    order_status: OrderStatus = OrderStatus.PENDING
    total_value: float = Field(..., description="Value of the listing at checkout")
    created_at: datetime
    updated_at: datetime


class OrderEnvelope(CamelModel):
    order: OrderResponse
    message: str


class OrderListResponse(ListMeta):
    orders: List[OrderResponse]
