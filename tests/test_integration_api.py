"""
Integration tests for all API endpoints.
Tests complete request/response cycles against a per-test SQLite database.
"""

import pytest
from datetime import datetime
from typing import Any, Dict
from httpx import AsyncClient
from fastapi import status

from tests.conftest import PropertyFactory, OrderFactory, InquiryFactory, assert_error_response

API = "/api"


async def create_listing(client: AsyncClient, **overrides: Any) -> Dict[str, Any]:
    response = await client.post(f"{API}/properties", json=PropertyFactory.create_property_payload(**overrides))
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["property"]


class TestPropertyEndpoints:
    """Integration tests for property endpoints."""

    @pytest.mark.asyncio
    async def test_create_property(self, async_client: AsyncClient):
        """Test creating a listing returns it with defaults applied."""
        response = await async_client.post(f"{API}/properties", json=PropertyFactory.create_property_payload())

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "Property created successfully"
        listing = data["property"]
        assert listing["id"] >= 1
        assert listing["title"] == "Modern Loft"
        assert listing["status"] == "available"
        assert listing["featured"] is False
        assert listing["yearBuilt"] == 2015
        assert listing["images"] == ["http://x/1.jpg"]
        assert listing["createdAt"] == listing["updatedAt"]

    @pytest.mark.asyncio
    async def test_create_property_missing_title(self, async_client: AsyncClient):
        """Test that a rejected create stores nothing."""
        payload = PropertyFactory.create_property_payload()
        del payload["title"]

        response = await async_client.post(f"{API}/properties", json=payload)

        assert_error_response(response, 400, "MISSING_TITLE")
        listing = (await async_client.get(f"{API}/properties")).json()
        assert listing["count"] == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides,code", [
        ({"price": "cheap"}, "INVALID_PRICE"),
        ({"price": 0}, "INVALID_PRICE"),
        ({"type": "castle"}, "INVALID_TYPE"),
        ({"images": "one.jpg"}, "INVALID_IMAGES"),
        ({"featured": "yes"}, "INVALID_FEATURED"),
    ])
    async def test_create_property_invalid_fields(self, async_client: AsyncClient, overrides, code):
        """Test field-specific validation codes."""
        response = await async_client.post(
            f"{API}/properties", json=PropertyFactory.create_property_payload(**overrides)
        )

        assert_error_response(response, 400, code)

    @pytest.mark.asyncio
    async def test_get_property_by_id(self, async_client: AsyncClient):
        """Test single lookup through the id query parameter and the path."""
        created = await create_listing(async_client)

        by_query = await async_client.get(f"{API}/properties", params={"id": created["id"]})
        by_path = await async_client.get(f"{API}/properties/{created['id']}")

        assert by_query.status_code == 200
        assert by_query.json()["property"] == created
        assert by_path.json()["property"] == created

    @pytest.mark.asyncio
    async def test_get_property_not_found(self, async_client: AsyncClient):
        """Test looking up a missing listing."""
        response = await async_client.get(f"{API}/properties", params={"id": 999})
        assert_error_response(response, 404, "PROPERTY_NOT_FOUND")

        response = await async_client.get(f"{API}/properties/abc")
        assert_error_response(response, 400, "INVALID_ID")

    @pytest.mark.asyncio
    async def test_get_property_id_out_of_range(self, async_client: AsyncClient):
        """Test that an id too large for the id column is a validation error."""
        response = await async_client.get(f"{API}/properties", params={"id": "99999999999999999999"})
        assert_error_response(response, 400, "INVALID_ID")

        response = await async_client.get(f"{API}/properties/99999999999999999999")
        assert_error_response(response, 400, "INVALID_ID")

    @pytest.mark.asyncio
    async def test_empty_id_lists_properties(self, async_client: AsyncClient):
        """Test that a blank id parameter is treated as absent."""
        await create_listing(async_client)

        response = await async_client.get(f"{API}/properties?id=")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert len(data["properties"]) == 1

    @pytest.mark.asyncio
    async def test_create_property_large_values(self, async_client: AsyncClient):
        """Test prices beyond 32 bits are stored and prices beyond 64 bits are rejected."""
        listing = await create_listing(async_client, price=3_000_000_000, area=5_000_000_000)
        assert listing["price"] == 3_000_000_000
        assert listing["area"] == 5_000_000_000

        response = await async_client.post(
            f"{API}/properties", json=PropertyFactory.create_property_payload(price=10 ** 19)
        )
        assert_error_response(response, 400, "INVALID_PRICE")

        response = await async_client.post(
            f"{API}/properties", json=PropertyFactory.create_property_payload(bedrooms=2 ** 31)
        )
        assert_error_response(response, 400, "INVALID_BEDROOMS")

    @pytest.mark.asyncio
    async def test_create_property_long_text(self, async_client: AsyncClient):
        """Test that long titles and locations are stored in full."""
        title = "Penthouse " * 30
        location = "Unit 4B, " * 40

        listing = await create_listing(async_client, title=title, location=location)

        assert listing["title"] == title.strip()
        assert listing["location"] == location.strip()

    @pytest.mark.asyncio
    async def test_list_properties_pagination(self, async_client: AsyncClient):
        """Test that count reports all matches while the page is limited."""
        for i in range(3):
            await create_listing(async_client, title=f"Listing {i}")

        response = await async_client.get(f"{API}/properties", params={"limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert len(data["properties"]) == 2
        assert data["count"] == 3
        assert data["limit"] == 2
        assert data["offset"] == 0
        assert data["properties"][0]["title"] == "Listing 2"

    @pytest.mark.asyncio
    async def test_list_properties_limit_is_capped(self, async_client: AsyncClient):
        """Test the maximum page size."""
        response = await async_client.get(f"{API}/properties", params={"limit": 500})

        assert response.status_code == 200
        assert response.json()["limit"] == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params,code", [
        ({"limit": "0"}, "INVALID_LIMIT"),
        ({"offset": "-5"}, "INVALID_OFFSET"),
        ({"minPrice": "abc"}, "INVALID_MIN_PRICE"),
        ({"minPrice": "99999999999999999999"}, "INVALID_MIN_PRICE"),
        ({"maxPrice": "99999999999999999999"}, "INVALID_MAX_PRICE"),
        ({"minBedrooms": "99999999999999999999"}, "INVALID_MIN_BEDROOMS"),
        ({"type": "castle"}, "INVALID_TYPE"),
        ({"status": "rented"}, "INVALID_STATUS"),
        ({"featured": "maybe"}, "INVALID_FEATURED"),
    ])
    async def test_list_properties_invalid_params(self, async_client: AsyncClient, params, code):
        """Test that malformed query parameters are rejected rather than ignored."""
        response = await async_client.get(f"{API}/properties", params=params)

        assert_error_response(response, 400, code)

    @pytest.mark.asyncio
    async def test_list_properties_filters(self, async_client: AsyncClient):
        """Test that filters are combined with AND."""
        await create_listing(async_client, title="Austin Condo", location="Austin, TX", price=300000, featured=True)
        await create_listing(
            async_client, title="Austin House", location="Austin, TX", type="house", price=650000, bedrooms=4
        )
        await create_listing(async_client, title="Denver Condo", location="Denver, CO", price=280000)

        response = await async_client.get(
            f"{API}/properties", params={"location": "austin", "maxPrice": 400000, "type": "condo"}
        )
        data = response.json()
        assert data["count"] == 1
        assert data["properties"][0]["title"] == "Austin Condo"

        response = await async_client.get(f"{API}/properties", params={"type": "all", "minBedrooms": 3})
        assert response.json()["count"] == 1

        response = await async_client.get(f"{API}/properties", params={"featured": "false"})
        assert response.json()["count"] == 2

        response = await async_client.get(f"{API}/properties", params={"search": "denver", "status": "all"})
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_update_property(self, async_client: AsyncClient):
        """Test partial update through both addressing forms."""
        created = await create_listing(async_client)

        response = await async_client.put(f"{API}/properties", params={"id": created["id"]}, json={"price": 475000})
        assert response.status_code == 200
        first = response.json()["property"]
        assert first["price"] == 475000
        assert first["title"] == "Modern Loft"
        assert first["createdAt"] == created["createdAt"]
        assert datetime.fromisoformat(first["updatedAt"]) > datetime.fromisoformat(created["updatedAt"])

        response = await async_client.put(f"{API}/properties/{created['id']}", json={"status": "sold"})
        second = response.json()["property"]
        assert second["status"] == "sold"
        assert datetime.fromisoformat(second["updatedAt"]) > datetime.fromisoformat(first["updatedAt"])

        fetched = await async_client.get(f"{API}/properties", params={"id": created["id"]})
        assert fetched.json()["property"]["status"] == "sold"

    @pytest.mark.asyncio
    async def test_update_property_errors(self, async_client: AsyncClient):
        """Test update error codes."""
        created = await create_listing(async_client)

        response = await async_client.put(f"{API}/properties", json={"price": 1})
        assert_error_response(response, 400, "MISSING_ID")

        response = await async_client.put(f"{API}/properties", params={"id": 999}, json={"price": 1})
        assert_error_response(response, 404, "PROPERTY_NOT_FOUND")

        response = await async_client.put(f"{API}/properties", params={"id": created["id"]}, json={})
        assert_error_response(response, 400, "NO_UPDATES")

        response = await async_client.put(f"{API}/properties", params={"id": created["id"]}, json={"bedrooms": -1})
        assert_error_response(response, 400, "INVALID_BEDROOMS")

    @pytest.mark.asyncio
    async def test_delete_property_cascades(self, async_client: AsyncClient):
        """Test deleting a listing also removes favorites, cart items, orders and inquiries."""
        created = await create_listing(async_client)
        pid = created["id"]
        user = {"userIdentifier": "user_abc", "propertyId": pid}

        await async_client.post(f"{API}/favorites", json=user)
        await async_client.post(f"{API}/cart", json=user)
        await async_client.post(f"{API}/orders", json=OrderFactory.create_order_payload(pid))
        await async_client.post(f"{API}/inquiries", json=InquiryFactory.create_inquiry_payload(pid))

        response = await async_client.delete(f"{API}/properties", params={"id": pid})
        assert response.status_code == 200
        assert response.json() == {"message": "Property deleted successfully"}

        favorites = await async_client.get(f"{API}/favorites", params={"userIdentifier": "user_abc"})
        cart = await async_client.get(f"{API}/cart", params={"userIdentifier": "user_abc"})
        orders = await async_client.get(f"{API}/orders")
        inquiries = await async_client.get(f"{API}/inquiries")
        assert favorites.json()["count"] == 0
        assert cart.json()["count"] == 0
        assert orders.json()["count"] == 0
        assert inquiries.json()["count"] == 0

        response = await async_client.delete(f"{API}/properties/{pid}")
        assert_error_response(response, 404, "PROPERTY_NOT_FOUND")


class TestOrderEndpoints:
    """Integration tests for order endpoints."""

    @pytest.mark.asyncio
    async def test_create_order(self, async_client: AsyncClient):
        """Test creating an order."""
        listing = await create_listing(async_client)

        response = await async_client.post(f"{API}/orders", json=OrderFactory.create_order_payload(listing["id"]))

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "Order created successfully"
        order = data["order"]
        assert order["buyerEmail"] == "jane.buyer@realty.io"
        assert order["orderStatus"] == "pending"
        assert order["inquiryType"] == "viewing"
        assert order["additionalNotes"] is None

    @pytest.mark.asyncio
    async def test_create_order_errors(self, async_client: AsyncClient):
        """Test order validation and the property existence check."""
        listing = await create_listing(async_client)

        response = await async_client.post(f"{API}/orders", json=OrderFactory.create_order_payload(999))
        assert_error_response(response, 404, "PROPERTY_NOT_FOUND")

        payload = OrderFactory.create_order_payload(listing["id"])
        del payload["buyerPhone"]
        response = await async_client.post(f"{API}/orders", json=payload)
        assert_error_response(response, 400, "MISSING_BUYER_PHONE")

        response = await async_client.post(
            f"{API}/orders", json=OrderFactory.create_order_payload(listing["id"], inquiryType="rent")
        )
        assert_error_response(response, 400, "INVALID_INQUIRY_TYPE")

    @pytest.mark.asyncio
    async def test_create_order_long_contact_fields(self, async_client: AsyncClient):
        """Test that contact details are not truncated or rejected by column width."""
        listing = await create_listing(async_client)
        phone = "+1 (555) 010-0000 ext. 1234, ask for the front desk after 5pm"
        zip_code = "78701-" * 5

        response = await async_client.post(
            f"{API}/orders",
            json=OrderFactory.create_order_payload(listing["id"], buyerPhone=phone, buyerZipCode=zip_code)
        )

        assert response.status_code == status.HTTP_201_CREATED
        order = response.json()["order"]
        assert order["buyerPhone"] == phone
        assert order["buyerZipCode"] == zip_code.strip()

    @pytest.mark.asyncio
    async def test_create_order_property_id_out_of_range(self, async_client: AsyncClient):
        """Test a propertyId too large for the id column."""
        response = await async_client.post(f"{API}/orders", json=OrderFactory.create_order_payload(10 ** 20))
        assert_error_response(response, 400, "INVALID_PROPERTY_ID")

    @pytest.mark.asyncio
    async def test_order_lifecycle(self, async_client: AsyncClient):
        """Test listing, updating and deleting orders."""
        listing = await create_listing(async_client)
        created = (await async_client.post(
            f"{API}/orders", json=OrderFactory.create_order_payload(listing["id"])
        )).json()["order"]

        response = await async_client.put(
            f"{API}/orders", params={"id": created["id"]}, json={"orderStatus": "contacted"}
        )
        assert response.status_code == 200
        assert response.json()["order"]["orderStatus"] == "contacted"

        response = await async_client.get(f"{API}/orders", params={"status": "contacted"})
        assert response.json()["count"] == 1
        response = await async_client.get(f"{API}/orders", params={"status": "pending"})
        assert response.json()["count"] == 0

        response = await async_client.delete(f"{API}/orders", params={"id": created["id"]})
        assert response.json()["message"] == "Order deleted successfully"

        response = await async_client.get(f"{API}/orders", params={"id": created["id"]})
        assert_error_response(response, 404, "ORDER_NOT_FOUND")


class TestInquiryEndpoints:
    """Integration tests for inquiry endpoints."""

    @pytest.mark.asyncio
    async def test_submit_inquiry(self, async_client: AsyncClient):
        """Test submitting and triaging an inquiry."""
        listing = await create_listing(async_client)

        response = await async_client.post(
            f"{API}/inquiries", json=InquiryFactory.create_inquiry_payload(listing["id"])
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "Inquiry submitted successfully"
        assert data["inquiry"]["status"] == "new"

        response = await async_client.put(
            f"{API}/inquiries", params={"id": data["inquiry"]["id"]}, json={"status": "read"}
        )
        assert response.json()["inquiry"]["status"] == "read"

    @pytest.mark.asyncio
    async def test_inquiry_errors(self, async_client: AsyncClient):
        """Test inquiry validation codes."""
        listing = await create_listing(async_client)

        response = await async_client.post(
            f"{API}/inquiries", json=InquiryFactory.create_inquiry_payload(listing["id"], email="not-an-email")
        )
        assert_error_response(response, 400, "INVALID_EMAIL")

        response = await async_client.post(
            f"{API}/inquiries", json=InquiryFactory.create_inquiry_payload(listing["id"], name=None)
        )
        assert_error_response(response, 400, "MISSING_NAME")

        response = await async_client.delete(f"{API}/inquiries", params={"id": 55})
        assert_error_response(response, 404, "INQUIRY_NOT_FOUND")


class TestFavoriteEndpoints:
    """Integration tests for favorite endpoints."""

    @pytest.mark.asyncio
    async def test_add_list_remove_favorite(self, async_client: AsyncClient):
        """Test the favorite round trip for one user."""
        listing = await create_listing(async_client)
        body = {"userIdentifier": "user_abc", "propertyId": listing["id"]}

        response = await async_client.post(f"{API}/favorites", json=body)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["message"] == "Property added to favorites"
        assert response.json()["favorite"]["propertyId"] == listing["id"]

        response = await async_client.get(f"{API}/favorites", params={"userIdentifier": "user_abc"})
        data = response.json()
        assert data["count"] == 1
        assert data["favorites"][0]["userIdentifier"] == "user_abc"

        other = await async_client.get(f"{API}/favorites", params={"userIdentifier": "user_xyz"})
        assert other.json()["count"] == 0

        response = await async_client.delete(f"{API}/favorites", params=body)
        assert response.json() == {"message": "Property removed from favorites"}

        response = await async_client.delete(f"{API}/favorites", params=body)
        assert_error_response(response, 404, "FAVORITE_NOT_FOUND")

    @pytest.mark.asyncio
    async def test_duplicate_favorite(self, async_client: AsyncClient):
        """Test that a second favorite of the same listing conflicts."""
        listing = await create_listing(async_client)
        body = {"userIdentifier": "user_abc", "propertyId": listing["id"]}

        first = await async_client.post(f"{API}/favorites", json=body)
        second = await async_client.post(f"{API}/favorites", json=body)

        assert first.status_code == status.HTTP_201_CREATED
        assert_error_response(second, 409, "DUPLICATE_FAVORITE")
        listed = await async_client.get(f"{API}/favorites", params={"userIdentifier": "user_abc"})
        assert listed.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_favorites_require_user(self, async_client: AsyncClient):
        """Test the userIdentifier requirement."""
        response = await async_client.get(f"{API}/favorites")
        assert_error_response(response, 400, "MISSING_USER_IDENTIFIER")

        response = await async_client.delete(f"{API}/favorites", params={"userIdentifier": "user_abc"})
        assert_error_response(response, 400, "MISSING_PROPERTY_ID")

    @pytest.mark.asyncio
    async def test_favorite_property_id_out_of_range(self, async_client: AsyncClient):
        """Test a propertyId too large for the id column in the body and the query string."""
        response = await async_client.post(
            f"{API}/favorites", json={"userIdentifier": "user_abc", "propertyId": 10 ** 20}
        )
        assert_error_response(response, 400, "INVALID_PROPERTY_ID")

        response = await async_client.delete(
            f"{API}/favorites", params={"userIdentifier": "user_abc", "propertyId": "99999999999999999999"}
        )
        assert_error_response(response, 400, "INVALID_PROPERTY_ID")


class TestCartEndpoints:
    """Integration tests for cart endpoints."""

    @pytest.mark.asyncio
    async def test_clear_cart(self, async_client: AsyncClient):
        """Test clearing a cart of three items."""
        for i in range(3):
            listing = await create_listing(async_client, title=f"Listing {i}")
            response = await async_client.post(
                f"{API}/cart", json={"userIdentifier": "user_abc", "propertyId": listing["id"]}
            )
            assert response.status_code == status.HTTP_201_CREATED
            assert response.json()["message"] == "Property added to cart"

        response = await async_client.delete(f"{API}/cart/clear", params={"userIdentifier": "user_abc"})
        assert response.status_code == 200
        assert response.json() == {"deletedCount": 3, "message": "Cart cleared successfully"}

        response = await async_client.get(f"{API}/cart", params={"userIdentifier": "user_abc"})
        assert response.json()["count"] == 0
        assert response.json()["cartItems"] == []

    @pytest.mark.asyncio
    async def test_cart_item_errors(self, async_client: AsyncClient):
        """Test duplicate and missing cart items."""
        listing = await create_listing(async_client)
        body = {"userIdentifier": "user_abc", "propertyId": listing["id"]}

        await async_client.post(f"{API}/cart", json=body)
        response = await async_client.post(f"{API}/cart", json=body)
        assert_error_response(response, 409, "DUPLICATE_CART_ITEM")

        response = await async_client.post(f"{API}/cart", json={"userIdentifier": "user_abc", "propertyId": 999})
        assert_error_response(response, 404, "PROPERTY_NOT_FOUND")

        response = await async_client.delete(f"{API}/cart", params=body)
        assert response.json() == {"message": "Property removed from cart"}

        response = await async_client.delete(f"{API}/cart", params=body)
        assert_error_response(response, 404, "CART_ITEM_NOT_FOUND")


class TestGeneralEndpoints:
    """Integration tests for health endpoints and request handling."""

    @pytest.mark.asyncio
    async def test_root(self, async_client: AsyncClient):
        """Test the service description endpoint."""
        response = await async_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["api_prefix"] == "/api"
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_invalid_json(self, async_client: AsyncClient):
        """Test that a malformed JSON body is a 400 with INVALID_JSON."""
        response = await async_client.post(
            f"{API}/properties",
            content=b'{"title": "Modern Loft",',
            headers={"Content-Type": "application/json"}
        )

        assert_error_response(response, 400, "INVALID_JSON")

    @pytest.mark.asyncio
    async def test_body_must_be_object(self, async_client: AsyncClient):
        """Test that a JSON array body is rejected."""
        response = await async_client.post(f"{API}/properties", json=[1, 2, 3])

        assert_error_response(response, 400, "INVALID_BODY")

    @pytest.mark.asyncio
    async def test_unsupported_content_type(self, async_client: AsyncClient):
        """Test that write requests must carry JSON."""
        response = await async_client.post(
            f"{API}/properties", content=b"title=Loft", headers={"Content-Type": "application/x-www-form-urlencoded"}
        )

        assert_error_response(response, 400, "UNSUPPORTED_CONTENT_TYPE")

    @pytest.mark.asyncio
    async def test_unknown_route(self, async_client: AsyncClient):
        """Test that unknown routes use the standard error shape."""
        response = await async_client.get(f"{API}/nowhere")

        assert_error_response(response, 404, "HTTP_404")
