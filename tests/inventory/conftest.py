import pytest
from inventory.listing.memory_adapter import InMemoryListingStore
from inventory.reservation.coordinator import ReservationCoordinator


@pytest.fixture()
def store(listing_store):
    """The registry's in-memory store, emptied and healthy for each test."""
    assert isinstance(listing_store, InMemoryListingStore)
    return listing_store


@pytest.fixture()
def coordinator(store):
    return ReservationCoordinator(store)
