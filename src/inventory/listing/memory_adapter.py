"""In-memory listing store for development and testing.

A single store-wide mutex stands in for the row-level atomicity a database
gives each conditional UPDATE. It only guards the individual
compare-and-set; reservation batches never hold it across listings.
"""

import threading

from shared.exceptions import ListingNotFound

from inventory.listing.port import Availability, Listing, ListingStore


class InMemoryListingStore(ListingStore):
    """Listing store that keeps records in a dict."""

    def __init__(self) -> None:
        self._listings: dict[str, Listing] = {}
        self._mutex = threading.Lock()
        self.should_fail = False
        self.failure_reason = "Listing store unavailable"

    def configure(self, should_fail: bool = False, failure_reason: str = "Listing store unavailable") -> None:
        """Make every write fail (useful to exercise storage faults in tests)."""
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def add(self, listing: Listing) -> None:
        with self._mutex:
            self._listings[str(listing.listing_id)] = listing

    def get(self, listing_id: str) -> Listing:
        listing = self._listings.get(str(listing_id))
        if listing is None:
            raise ListingNotFound({"listing_id": [f"Listing {listing_id} not found"]})
        return listing

    def get_availability(self, listing_id: str) -> Availability:
        return Availability(self.get(listing_id).availability)

    def conditional_set_availability(
        self,
        listing_id: str,
        expected: Availability,
        new: Availability,
    ) -> bool:
        if self.should_fail:
            raise ConnectionError(self.failure_reason)

        with self._mutex:
            listing = self._listings.get(str(listing_id))
            if listing is None:
                raise ListingNotFound({"listing_id": [f"Listing {listing_id} not found"]})
            if listing.availability != expected.value:
                return False
            self._listings[str(listing_id)] = listing.with_availability(new)
            return True

    def reset(self) -> None:
        """Drop all listings (useful between tests)."""
        with self._mutex:
            self._listings.clear()
        self.should_fail = False
        self.failure_reason = "Listing store unavailable"
