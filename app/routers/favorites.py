"""
Favorite API endpoints, addressed by userIdentifier and propertyId.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Optional

from app.services.favorite import FavoriteService
from app.schemas.common import MessageResponse
from app.schemas.favorite import FavoriteResponse, FavoriteEnvelope, FavoriteListResponse
from app.schemas.error import get_crud_error_responses, get_common_error_responses
from app.utils.dependencies import get_favorite_service
from app.utils.query_params import Pagination, QueryParser, get_pagination


router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get(
    "",
    response_model=FavoriteListResponse,
    summary="List favorites",
    description="Get a user's favorites in the order they were added.",
    responses=get_common_error_responses()
)
async def list_favorites(
    user_identifier: Optional[str] = Query(None, alias="userIdentifier", description="Owner token"),
    property_id: Optional[str] = Query(None, alias="propertyId", description="Listing id"),
    pagination: Pagination = Depends(get_pagination),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteListResponse:
    favorites, total_count = await favorite_service.list_favorites(
        QueryParser.require(QueryParser.string(user_identifier), "userIdentifier"),
        pagination,
        property_id=QueryParser.integer(property_id, "propertyId", minimum=1)
    )

    return FavoriteListResponse(
        favorites=[FavoriteResponse.model_validate(f) for f in favorites],
        count=total_count,
        limit=pagination.limit,
        offset=pagination.offset,
        message="Favorites retrieved successfully"
    )


@router.post(
    "",
    response_model=FavoriteEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Add favorite",
    description="Add a listing to a user's favorites. A listing can be favorited once per user.",
    responses=get_crud_error_responses()
)
async def add_favorite(
    body: Any = Body(None),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteEnvelope:
    """
    Add a listing to a user's favorites.

    Raises:
        ValidationError: If userIdentifier or propertyId is missing or malformed
        PropertyNotFoundError: If the listing doesn't exist
        DuplicateResourceError: If the pair already exists (DUPLICATE_FAVORITE)
    """
    favorite = await favorite_service.add_favorite(body)
    return FavoriteEnvelope(
        favorite=FavoriteResponse.model_validate(favorite),
        message="Property added to favorites"
    )


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Remove favorite",
    responses=get_common_error_responses()
)
async def remove_favorite(
    user_identifier: Optional[str] = Query(None, alias="userIdentifier", description="Owner token"),
    property_id: Optional[str] = Query(None, alias="propertyId", description="Listing id"),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> MessageResponse:
    await favorite_service.remove_favorite(
        QueryParser.require(QueryParser.string(user_identifier), "userIdentifier"),
        QueryParser.record_id(property_id, "propertyId")
    )
    return MessageResponse(message="Property removed from favorites")
