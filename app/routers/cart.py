"""
Cart API endpoints, addressed by userIdentifier and propertyId.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Optional

from app.services.cart import CartService
from app.schemas.common import MessageResponse
from app.schemas.favorite import (
    CartItemResponse,
    CartItemEnvelope,
    CartItemListResponse,
    CartClearResponse
)
from app.schemas.error import get_crud_error_responses, get_common_error_responses
from app.utils.dependencies import get_cart_service
from app.utils.query_params import Pagination, QueryParser, get_pagination


router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get(
    "",
    response_model=CartItemListResponse,
    summary="List cart items",
    description="Get a user's cart in the order items were added.",
    responses=get_common_error_responses()
)
async def list_cart(
    user_identifier: Optional[str] = Query(None, alias="userIdentifier", description="Owner token"),
    property_id: Optional[str] = Query(None, alias="propertyId", description="Listing id"),
    pagination: Pagination = Depends(get_pagination),
    cart_service: CartService = Depends(get_cart_service)
) -> CartItemListResponse:
    cart_items, total_count = await cart_service.list_cart(
        QueryParser.require(QueryParser.string(user_identifier), "userIdentifier"),
        pagination,
        property_id=QueryParser.integer(property_id, "propertyId", minimum=1)
    )

    return CartItemListResponse(
        cart_items=[CartItemResponse.model_validate(c) for c in cart_items],
        count=total_count,
        limit=pagination.limit,
        offset=pagination.offset,
        message="Cart retrieved successfully"
    )


@router.post(
    "",
    response_model=CartItemEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Add to cart",
    description="Put a listing into a user's cart. A listing can be in a cart once.",
    responses=get_crud_error_responses()
)
async def add_to_cart(
    body: Any = Body(None),
    cart_service: CartService = Depends(get_cart_service)
) -> CartItemEnvelope:
    cart_item = await cart_service.add_to_cart(body)
    return CartItemEnvelope(
        cart_item=CartItemResponse.model_validate(cart_item),
        message="Property added to cart"
    )


@router.delete(
    "/clear",
    response_model=CartClearResponse,
    summary="Clear cart",
    description="Remove every item from a user's cart and report how many were removed.",
    responses=get_common_error_responses()
)
async def clear_cart(
    user_identifier: Optional[str] = Query(None, alias="userIdentifier", description="Owner token"),
    cart_service: CartService = Depends(get_cart_service)
) -> CartClearResponse:
    deleted_count = await cart_service.clear_cart(
        QueryParser.require(QueryParser.string(user_identifier), "userIdentifier")
    )
    return CartClearResponse(deleted_count=deleted_count, message="Cart cleared successfully")


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Remove from cart",
    responses=get_common_error_responses()
)
async def remove_from_cart(
    user_identifier: Optional[str] = Query(None, alias="userIdentifier", description="Owner token"),
    property_id: Optional[str] = Query(None, alias="propertyId", description="Listing id"),
    cart_service: CartService = Depends(get_cart_service)
) -> MessageResponse:
    await cart_service.remove_from_cart(
        QueryParser.require(QueryParser.string(user_identifier), "userIdentifier"),
        QueryParser.record_id(property_id, "propertyId")
    )
    return MessageResponse(message="Property removed from cart")
