"""
Async HTTP client for the marketplace API.
Decodes success envelopes into response schemas and turns error bodies into APIClientError.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

import httpx

from app.config import settings
from app.schemas.property import PropertyResponse
from app.schemas.order import OrderResponse
from app.schemas.favorite import FavoriteResponse, CartItemResponse

logger = logging.getLogger(__name__)


class APIClientError(Exception):
    """
    A request to the API failed.

    status is the HTTP status (0 when no response was received), code the
    API error code and message the human-readable error.
    """

    def __init__(self, status: int, code: str, message: str):
        super().__init__(f"{status} {code}: {message}")
        self.status = status
        self.code = code
        self.message = message


class MarketplaceClient:
    """
    Thin async wrapper around the REST endpoints.

    Pass an httpx.AsyncClient to reuse a connection pool or to talk to an
    in-process app through a custom transport.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.client_timeout
        )

    async def __aenter__(self) -> "MarketplaceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None
    ) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON envelope.

        Raises:
            APIClientError: On an error status or a transport failure
        """
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise APIClientError(0, "NETWORK_ERROR", str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            raise APIClientError(
                response.status_code,
                payload.get("code", f"HTTP_{response.status_code}"),
                payload.get("error", response.text)
            )

        return payload

    # Properties

    async def list_properties(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **filters: Any
    ) -> Tuple[List[PropertyResponse], int]:
        """
        Fetch one page of listings.

        Filters use the API's query names, e.g. minPrice=100000 or type="condo".

        Returns:
            Tuple of (properties, total matching count)
        """
        params = {key: _query_value(value) for key, value in filters.items()}
        params.update(limit=limit, offset=offset)
        payload = await self._request("GET", "/properties", params=params)
        return [PropertyResponse.model_validate(p) for p in payload["properties"]], payload["count"]

    async def get_property(self, property_id: int) -> PropertyResponse:
        payload = await self._request("GET", "/properties", params={"id": property_id})
        return PropertyResponse.model_validate(payload["property"])

    # Cart

    async def list_cart(
        self,
        user_identifier: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> Tuple[List[CartItemResponse], int]:
        payload = await self._request(
            "GET", "/cart",
            params={"userIdentifier": user_identifier, "limit": limit, "offset": offset}
        )
        return [CartItemResponse.model_validate(c) for c in payload["cartItems"]], payload["count"]

    async def add_to_cart(self, user_identifier: str, property_id: int) -> CartItemResponse:
        payload = await self._request(
            "POST", "/cart",
            json={"userIdentifier": user_identifier, "propertyId": property_id}
        )
        return CartItemResponse.model_validate(payload["cartItem"])

    async def remove_from_cart(self, user_identifier: str, property_id: int) -> None:
        await self._request(
            "DELETE", "/cart",
            params={"userIdentifier": user_identifier, "propertyId": property_id}
        )

    async def clear_cart(self, user_identifier: str) -> int:
        """Empty the remote cart and return how many items were removed."""
        payload = await self._request("DELETE", "/cart/clear", params={"userIdentifier": user_identifier})
        return payload["deletedCount"]

    # Favorites

    async def list_favorites(
        self,
        user_identifier: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> Tuple[List[FavoriteResponse], int]:
        payload = await self._request(
            "GET", "/favorites",
            params={"userIdentifier": user_identifier, "limit": limit, "offset": offset}
        )
        return [FavoriteResponse.model_validate(f) for f in payload["favorites"]], payload["count"]

    async def add_favorite(self, user_identifier: str, property_id: int) -> FavoriteResponse:
        payload = await self._request(
            "POST", "/favorites",
            json={"userIdentifier": user_identifier, "propertyId": property_id}
        )
        return FavoriteResponse.model_validate(payload["favorite"])

    async def remove_favorite(self, user_identifier: str, property_id: int) -> None:
        await self._request(
            "DELETE", "/favorites",
            params={"userIdentifier": user_identifier, "propertyId": property_id}
        )

    # Orders

    async def create_order(self, order: Dict[str, Any]) -> OrderResponse:
        """Create an order from a camelCase order body."""
        payload = await self._request("POST", "/orders", json=order)
        return OrderResponse.model_validate(payload["order"])


def _query_value(value: Any) -> Any:
    # Query strings spell booleans the way the API parses them
    if isinstance(value, bool):
        return "true" if value else "false"
    return value
