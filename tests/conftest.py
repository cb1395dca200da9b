"""
Test configuration and fixtures for the property marketplace API.
Provides a fresh SQLite database per test, API clients, and test data factories.
"""

import os

# Settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from typing import Any, AsyncGenerator, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.database import Base, get_db, engine_options, utc_now
from app.models.property import Property, PropertyType
from app.models.order import Order, InquiryType
from app.models.inquiry import Inquiry
from app.models.favorite import Favorite
from app.models.cart import CartItem
from app.repositories.property import PropertyRepository
from app.repositories.order import OrderRepository
from app.repositories.inquiry import InquiryRepository
from app.repositories.favorite import FavoriteRepository
from app.repositories.cart import CartRepository
from app.services.property import PropertyService
from app.services.order import OrderService
from app.services.inquiry import InquiryService
from app.services.favorite import FavoriteService
from app.services.cart import CartService


@pytest.fixture
async def test_engine(tmp_path):
    """File-backed SQLite database, so concurrent requests get their own connections."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'marketplace.db'}"
    engine = create_async_engine(url, **engine_options(url))

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client; every request gets its own session on the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def order_repository(db_session: AsyncSession) -> OrderRepository:
    return OrderRepository(db_session)


@pytest.fixture
def inquiry_repository(db_session: AsyncSession) -> InquiryRepository:
    return InquiryRepository(db_session)


@pytest.fixture
def favorite_repository(db_session: AsyncSession) -> FavoriteRepository:
    return FavoriteRepository(db_session)


@pytest.fixture
def cart_repository(db_session: AsyncSession) -> CartRepository:
    return CartRepository(db_session)


# Service fixtures
@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def order_service(db_session: AsyncSession) -> OrderService:
    return OrderService(db_session)


@pytest.fixture
def inquiry_service(db_session: AsyncSession) -> InquiryService:
    return InquiryService(db_session)


@pytest.fixture
def favorite_service(db_session: AsyncSession) -> FavoriteService:
    return FavoriteService(db_session)


@pytest.fixture
def cart_service(db_session: AsyncSession) -> CartService:
    return CartService(db_session)


# Test data factories
class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_payload(**overrides: Any) -> Dict[str, Any]:
        """Request body (camelCase) for a valid listing."""
        payload = {
            "title": "Modern Loft",
            "description": "A very nice place to live",
            "price": 500000,
            "location": "Austin, TX",
            "type": "condo",
            "bedrooms": 2,
            "bathrooms": 2,
            "area": 1200,
            "images": ["http://x/1.jpg"],
            "amenities": ["Pool"],
            "yearBuilt": 2015,
        }
        payload.update(overrides)
        return payload

    @staticmethod
    def create_property_data(**overrides: Any) -> Dict[str, Any]:
        """Model attributes (snake_case) for a valid listing."""
        now = utc_now()
        data = {
            "title": "Test Property",
            "description": "A beautiful test property",
            "price": 350000,
            "location": "Test City, CA",
            "type": PropertyType.HOUSE,
            "bedrooms": 3,
            "bathrooms": 2,
            "area": 1800,
            "images": [],
            "amenities": [],
            "year_built": 2001,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(repo: PropertyRepository, **overrides: Any) -> Property:
        return await repo.create(PropertyFactory.create_property_data(**overrides))


class OrderFactory:
    """Factory for creating test orders."""

    @staticmethod
    def create_order_payload(property_id: int, **overrides: Any) -> Dict[str, Any]:
        payload = {
            "propertyId": property_id,
            "buyerName": "Jane Buyer",
            "buyerEmail": "Jane.Buyer@Realty.io",
            "buyerPhone": "555-0100",
            "buyerAddress": "12 Elm Street",
            "buyerCity": "Austin",
            "buyerState": "TX",
            "buyerZipCode": "78701",
            "inquiryType": "viewing",
            "preferredContactTime": "Weekday mornings",
            "totalValue": 500000,
        }
        payload.update(overrides)
        return payload

    @staticmethod
    async def create_order(repo: OrderRepository, property_id: int, **overrides: Any) -> Order:
        now = utc_now()
        data = {
            "property_id": property_id,
            "buyer_name": "Jane Buyer",
            "buyer_email": "jane.buyer@realty.io",
            "buyer_phone": "555-0100",
            "buyer_address": "12 Elm Street",
            "buyer_city": "Austin",
            "buyer_state": "TX",
            "buyer_zip_code": "78701",
            "inquiry_type": InquiryType.VIEWING,
            "preferred_contact_time": "Weekday mornings",
            "total_value": 500000.0,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return await repo.create(data)


class InquiryFactory:
    """Factory for creating test inquiries."""

    @staticmethod
    def create_inquiry_payload(property_id: int, **overrides: Any) -> Dict[str, Any]:
        payload = {
            "propertyId": property_id,
            "name": "Sam Seeker",
            "email": "sam@realty.io",
            "phone": "555-0199",
            "message": "Is the loft still available?",
        }
        payload.update(overrides)
        return payload

    @staticmethod
    async def create_inquiry(repo: InquiryRepository, property_id: int, **overrides: Any) -> Inquiry:
        data = {
            "property_id": property_id,
            "name": "Sam Seeker",
            "email": "sam@realty.io",
            "phone": "555-0199",
            "message": "Is the loft still available?",
            "created_at": utc_now(),
        }
        data.update(overrides)
        return await repo.create(data)


async def add_favorite(repo: FavoriteRepository, user_identifier: str, property_id: int) -> Favorite:
    return await repo.create({"user_identifier": user_identifier, "property_id": property_id})


async def add_cart_item(repo: CartRepository, user_identifier: str, property_id: int) -> CartItem:
    return await repo.create({"user_identifier": user_identifier, "property_id": property_id})


# Assertion helpers
def assert_error_response(response, status_code: int, code: Optional[str] = None) -> Dict[str, Any]:
    """Assert the {"error", "code"} error shape and return the body."""
    assert response.status_code == status_code, response.text
    body = response.json()
    assert set(body) == {"error", "code"}
    assert isinstance(body["error"], str) and body["error"]
    if code is not None:
        assert body["code"] == code
    return body
