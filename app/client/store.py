"""
Client store: the browser-side view of one user's cart and favorites.

Every mutation calls the API first and touches local state only after the
call succeeded, so a failure leaves the store exactly as it was.
"""

from typing import List, Optional, Tuple
import asyncio
import logging

from app.client.api import MarketplaceClient, APIClientError
from app.client.state import ClientState, LocalStateStore
from app.models.order import InquiryType
from app.schemas.common import CamelModel
from app.schemas.order import OrderResponse
from app.schemas.property import PropertyResponse

logger = logging.getLogger(__name__)

SYNC_PAGE_SIZE = 100


class CheckoutContact(CamelModel):
    """Buyer details entered on the checkout form."""

    buyer_name: str
    buyer_email: str
    buyer_phone: str
    buyer_address: str
    buyer_city: str
    buyer_state: str
    buyer_zip_code: str
    inquiry_type: InquiryType = InquiryType.VIEWING
    preferred_contact_time: str
    additional_notes: Optional[str] = None


class CheckoutError(Exception):
    """
    One or more orders of a checkout failed.

    Orders that were created stay created; the cart is left intact so the
    whole submission can be retried.
    """

    def __init__(self, failures: List[Tuple[int, APIClientError]], orders: List[OrderResponse]):
        failed_ids = ", ".join(str(property_id) for property_id, _ in failures)
        super().__init__(f"Checkout failed for {len(failures)} propert(ies): {failed_ids}")
        self.failures = failures
        self.orders = orders


class ClientStore:
    """
    Explicit client state object bound to an API client.

    Args:
        client: API client used for every remote call
        state: Current client state
        state_store: Optional persistence; saved after every change
    """

    def __init__(
        self,
        client: MarketplaceClient,
        state: Optional[ClientState] = None,
        state_store: Optional[LocalStateStore] = None
    ):
        self.client = client
        self.state = state or ClientState()
        self.state_store = state_store

    @classmethod
    async def open(cls, client: MarketplaceClient, state_store: LocalStateStore) -> "ClientStore":
        """Create a store from persisted state."""
        return cls(client, await state_store.load(), state_store)

    @property
    def user_identifier(self) -> str:
        return self.state.user_identifier

    @property
    def cart(self) -> List[PropertyResponse]:
        return list(self.state.cart)

    @property
    def favorites(self) -> List[int]:
        return list(self.state.favorites)

    def is_in_cart(self, property_id: int) -> bool:
        return any(p.id == property_id for p in self.state.cart)

    def is_favorite(self, property_id: int) -> bool:
        return property_id in self.state.favorites

    def cart_total(self) -> int:
        """Sum of the prices of every listing in the cart."""
        return sum(p.price for p in self.state.cart)

    async def add_to_cart(self, property_obj: PropertyResponse) -> None:
        """Put a listing into the cart. A listing already in the cart is left alone."""
        if self.is_in_cart(property_obj.id):
            return

        await self.client.add_to_cart(self.user_identifier, property_obj.id)
        self.state.cart.append(property_obj)
        await self._persist()

    async def remove_from_cart(self, property_id: int) -> None:
        await self.client.remove_from_cart(self.user_identifier, property_id)
        self.state.cart = [p for p in self.state.cart if p.id != property_id]
        await self._persist()

    async def clear_cart(self) -> int:
        """
        Empty the cart.

        Returns:
            Number of items the server removed
        """
        deleted_count = await self.client.clear_cart(self.user_identifier)
        self.state.cart = []
        await self._persist()
        return deleted_count

    async def toggle_favorite(self, property_id: int) -> bool:
        """
        Favorite a listing, or unfavorite it if it already is one.

        Returns:
            Whether the listing is a favorite afterwards
        """
        if self.is_favorite(property_id):
            await self.client.remove_favorite(self.user_identifier, property_id)
            self.state.favorites = [f for f in self.state.favorites if f != property_id]
        else:
            await self.client.add_favorite(self.user_identifier, property_id)
            self.state.favorites.append(property_id)

        await self._persist()
        return self.is_favorite(property_id)

    async def sync(self) -> None:
        """
        Rebuild cart and favorites from the server.

        Cart items only carry property ids, so the full records are collected
        by paging through the property list. Local state is replaced only
        once everything has been fetched.
        """
        cart_ids = [item.property_id for item in await self._fetch_all(self.client.list_cart)]
        favorite_ids = [f.property_id for f in await self._fetch_all(self.client.list_favorites)]

        wanted = set(cart_ids)
        found = {}
        offset = 0
        while wanted - found.keys():
            properties, total_count = await self.client.list_properties(limit=SYNC_PAGE_SIZE, offset=offset)
            for property_obj in properties:
                if property_obj.id in wanted:
                    found[property_obj.id] = property_obj
            offset += len(properties)
            if not properties or offset >= total_count:
                break

        self.state.cart = [found[property_id] for property_id in cart_ids if property_id in found]
        self.state.favorites = favorite_ids
        await self._persist()

        logger.info(
            f"Synced {self.user_identifier}: {len(self.state.cart)} cart item(s), "
            f"{len(self.state.favorites)} favorite(s)"
        )

    async def checkout(self, contact: CheckoutContact) -> List[OrderResponse]:
        """
        Create one order per listing in the cart, all at once.

        Each order's total value is the price of its listing. When every
        order succeeds the remote and local cart are cleared.

        Returns:
            Created orders, in cart order

        Raises:
            CheckoutError: If any order failed; the cart is kept
        """
        cart = list(self.state.cart)
        if not cart:
            return []

        base = contact.model_dump(by_alias=True, mode="json")
        results = await asyncio.gather(
            *(
                self.client.create_order({**base, "propertyId": p.id, "totalValue": p.price})
                for p in cart
            ),
            return_exceptions=True
        )

        orders: List[OrderResponse] = []
        failures: List[Tuple[int, APIClientError]] = []
        for property_obj, result in zip(cart, results):
            if isinstance(result, APIClientError):
                failures.append((property_obj.id, result))
            elif isinstance(result, BaseException):
                raise result
            else:
                orders.append(result)

        if failures:
            logger.warning(f"Checkout for {self.user_identifier} failed for {len(failures)} of {len(cart)} orders")
            raise CheckoutError(failures, orders)

        await self.clear_cart()
        logger.info(f"Checkout for {self.user_identifier} created {len(orders)} order(s)")
        return orders

    async def _fetch_all(self, list_page) -> list:
        items: list = []
        while True:
            page, total_count = await list_page(self.user_identifier, limit=SYNC_PAGE_SIZE, offset=len(items))
            items.extend(page)
            if not page or len(items) >= total_count:
                return items

    async def _persist(self) -> None:
        if self.state_store is not None:
            await self.state_store.save(self.state)
