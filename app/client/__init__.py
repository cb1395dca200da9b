"""
Client-side access to the marketplace API: an HTTP client and a store
mirroring one browser's cart and favorites.
"""

from app.client.api import MarketplaceClient, APIClientError
from app.client.state import ClientState, LocalStateStore
from app.client.store import ClientStore, CheckoutContact, CheckoutError

__all__ = [
    "MarketplaceClient",
    "APIClientError",
    "ClientState",
    "LocalStateStore",
    "ClientStore",
    "CheckoutContact",
    "CheckoutError",
]
