"""Listing store factory.

Provides get_listing_store() / set_listing_store() to swap implementations:
- InMemoryListingStore for development and testing (default)
- SqlAlchemyListingStore when LISTING_STORE_URI is set
"""

import os

from inventory.listing.memory_adapter import InMemoryListingStore
from inventory.listing.port import Availability, Listing, ListingStore

__all__ = [
    "Availability",
    "Listing",
    "ListingStore",
    "get_listing_store",
    "reset_listing_store",
    "set_listing_store",
]

_current_store: ListingStore | None = None


def get_listing_store() -> ListingStore:
    """Return the current listing store, building it from the environment on first use."""
    global _current_store
    if _current_store is None:
        database_uri = os.environ.get("LISTING_STORE_URI")
        if database_uri:
            from inventory.listing.sqlalchemy_adapter import SqlAlchemyListingStore

            _current_store = SqlAlchemyListingStore(database_uri)
        else:
            _current_store = InMemoryListingStore()
    return _current_store


def set_listing_store(store: ListingStore) -> None:
    """Override the active listing store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_listing_store() -> None:
    """Reset to the default store."""
    global _current_store
    _current_store = None
