"""
Property listing API endpoints: search, single lookup and admin CRUD.
Listings are addressed either by the id query parameter or by path id; both
forms share the same service and store.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Optional, Union

from app.models.property import PropertyType, PropertyStatus
from app.repositories.property import PropertySearchFilters
from app.services.property import PropertyService
from app.schemas.common import MessageResponse
from app.schemas.property import PropertyResponse, PropertyEnvelope, PropertyListResponse
from app.schemas.error import get_crud_error_responses, get_common_error_responses
from app.utils.dependencies import get_property_service
from app.utils.query_params import Pagination, QueryParser, get_pagination
from app.utils.validators import MAX_BIG_INTEGER


router = APIRouter(prefix="/properties", tags=["Properties"])


def _envelope(property_obj, message: str) -> PropertyEnvelope:
    return PropertyEnvelope(property=PropertyResponse.model_validate(property_obj), message=message)


@router.get(
    "",
    response_model=Union[PropertyListResponse, PropertyEnvelope],
    status_code=status.HTTP_200_OK,
    summary="List properties with search and filtering",
    description="Get a page of listings matching all supplied filters, or a single listing when id is given.",
    responses=get_common_error_responses()
)
async def list_properties(
    id: Optional[str] = Query(None, description="Return only this listing"),
    search: Optional[str] = Query(None, description="Text matched against title, description and location"),
    min_price: Optional[str] = Query(None, alias="minPrice", description="Minimum price"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Maximum price"),
    location: Optional[str] = Query(None, description="Location substring"),
    type: Optional[str] = Query(None, description="Property type, or 'all'"),
    min_bedrooms: Optional[str] = Query(None, alias="minBedrooms", description="Minimum number of bedrooms"),
    min_bathrooms: Optional[str] = Query(None, alias="minBathrooms", description="Minimum number of bathrooms"),
    status_filter: Optional[str] = Query(None, alias="status", description="Sale status, or 'all'"),
    featured: Optional[str] = Query(None, description="Featured flag (true/false)"),
    pagination: Pagination = Depends(get_pagination),
    property_service: PropertyService = Depends(get_property_service)
) -> Union[PropertyListResponse, PropertyEnvelope]:
    """
    List properties, or fetch one by id.

    Args:
        id: Optional listing id; when present all other filters are ignored
        pagination: Page window
        property_service: Property service instance

    Returns:
        Page of properties with the total matching count, or a single property

    Raises:
        ValidationError: If a filter value is malformed (INVALID_<PARAM>)
        PropertyNotFoundError: If id is given and doesn't exist
    """
    if QueryParser.string(id) is not None:
        property_obj = await property_service.get_property(QueryParser.record_id(id))
        return _envelope(property_obj, "Property retrieved successfully")

    filters = PropertySearchFilters(
        search=QueryParser.string(search),
        min_price=QueryParser.integer(min_price, "minPrice", minimum=0, maximum=MAX_BIG_INTEGER),
        max_price=QueryParser.integer(max_price, "maxPrice", minimum=0, maximum=MAX_BIG_INTEGER),
        location=QueryParser.string(location),
        property_type=QueryParser.choice(type, "type", PropertyType, allow_all=True),
        min_bedrooms=QueryParser.integer(min_bedrooms, "minBedrooms", minimum=0),
        min_bathrooms=QueryParser.integer(min_bathrooms, "minBathrooms", minimum=0),
        status=QueryParser.choice(status_filter, "status", PropertyStatus, allow_all=True),
        featured=QueryParser.boolean(featured, "featured"),
    )

    properties, total_count = await property_service.list_properties(filters, pagination)

    return PropertyListResponse(
        properties=[PropertyResponse.model_validate(p) for p in properties],
        count=total_count,
        limit=pagination.limit,
        offset=pagination.offset,
        message="Properties retrieved successfully"
    )


@router.post(
    "",
    response_model=PropertyEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a listing. Every listing field except featured and status is required.",
    responses=get_crud_error_responses()
)
async def create_property(
    body: Any = Body(None),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyEnvelope:
    """
    Create a new property listing.

    Raises:
        ValidationError: If a field is missing (MISSING_<FIELD>) or malformed (INVALID_<FIELD>)
    """
    property_obj = await property_service.create_property(body)
    return _envelope(property_obj, "Property created successfully")


@router.put(
    "",
    response_model=PropertyEnvelope,
    summary="Update property",
    description="Partially update the listing named by the id query parameter.",
    responses=get_crud_error_responses()
)
async def update_property(
    id: Optional[str] = Query(None, description="Listing id"),
    body: Any = Body(None),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyEnvelope:
    property_obj = await property_service.update_property(QueryParser.record_id(id), body)
    return _envelope(property_obj, "Property updated successfully")


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete property",
    description="Delete the listing named by the id query parameter together with its dependent records.",
    responses=get_common_error_responses()
)
async def delete_property(
    id: Optional[str] = Query(None, description="Listing id"),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_property(QueryParser.record_id(id))
    return MessageResponse(message="Property deleted successfully")


@router.get(
    "/{property_id}",
    response_model=PropertyEnvelope,
    summary="Get property by path id",
    responses=get_common_error_responses()
)
async def get_property(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyEnvelope:
    property_obj = await property_service.get_property(QueryParser.record_id(property_id))
    return _envelope(property_obj, "Property retrieved successfully")


@router.put(
    "/{property_id}",
    response_model=PropertyEnvelope,
    summary="Update property by path id",
    responses=get_crud_error_responses()
)
async def update_property_by_path(
    property_id: str,
    body: Any = Body(None),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyEnvelope:
    property_obj = await property_service.update_property(QueryParser.record_id(property_id), body)
    return _envelope(property_obj, "Property updated successfully")


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Delete property by path id",
    responses=get_common_error_responses()
)
async def delete_property_by_path(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_property(QueryParser.record_id(property_id))
    return MessageResponse(message="Property deleted successfully")
