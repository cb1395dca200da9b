"""
Order API endpoints: checkout requests and their admin triage.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Optional, Union

from app.models.order import OrderStatus
from app.services.order import OrderService
from app.schemas.common import MessageResponse
from app.schemas.order import OrderResponse, OrderEnvelope, OrderListResponse
from app.schemas.error import get_crud_error_responses, get_common_error_responses
from app.utils.dependencies import get_order_service
from app.utils.query_params import Pagination, QueryParser, get_pagination


router = APIRouter(prefix="/orders", tags=["Orders"])


def _envelope(order, message: str) -> OrderEnvelope:
    return OrderEnvelope(order=OrderResponse.model_validate(order), message=message)


@router.get(
    "",
    response_model=Union[OrderListResponse, OrderEnvelope],
    summary="List orders",
    description="Get a page of orders filtered by status and property, or a single order when id is given.",
    responses=get_common_error_responses()
)
async def list_orders(
    id: Optional[str] = Query(None, description="Return only this order"),
    status_filter: Optional[str] = Query(None, alias="status", description="Order status"),
    property_id: Optional[str] = Query(None, alias="propertyId", description="Listing id"),
    pagination: Pagination = Depends(get_pagination),
    order_service: OrderService = Depends(get_order_service)
) -> Union[OrderListResponse, OrderEnvelope]:
    """
    List orders newest first, or fetch one by id.

    Raises:
        ValidationError: If a filter value is malformed
        OrderNotFoundError: If id is given and doesn't exist
    """
    if QueryParser.string(id) is not None:
        order = await order_service.get_order(QueryParser.record_id(id))
        return _envelope(order, "Order retrieved successfully")

    orders, total_count = await order_service.list_orders(
        pagination,
        status=QueryParser.choice(status_filter, "status", OrderStatus, allow_all=True),
        property_id=QueryParser.integer(property_id, "propertyId", minimum=1)
    )

    return OrderListResponse(
        orders=[OrderResponse.model_validate(o) for o in orders],
        count=total_count,
        limit=pagination.limit,
        offset=pagination.offset,
        message="Orders retrieved successfully"
    )


@router.post(
    "",
    response_model=OrderEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Create a buyer request for one listing.",
    responses=get_crud_error_responses()
)
async def create_order(
    body: Any = Body(None),
    order_service: OrderService = Depends(get_order_service)
) -> OrderEnvelope:
    order = await order_service.create_order(body)
    return _envelope(order, "Order created successfully")


@router.put(
    "",
    response_model=OrderEnvelope,
    summary="Update order",
    description="Partially update the order named by the id query parameter.",
    responses=get_crud_error_responses()
)
async def update_order(
    id: Optional[str] = Query(None, description="Order id"),
    body: Any = Body(None),
    order_service: OrderService = Depends(get_order_service)
) -> OrderEnvelope:
    order = await order_service.update_order(QueryParser.record_id(id), body)
    return _envelope(order, "Order updated successfully")


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete order",
    responses=get_common_error_responses()
)
async def delete_order(
    id: Optional[str] = Query(None, description="Order id"),
    order_service: OrderService = Depends(get_order_service)
) -> MessageResponse:
    await order_service.delete_order(QueryParser.record_id(id))
    return MessageResponse(message="Order deleted successfully")
