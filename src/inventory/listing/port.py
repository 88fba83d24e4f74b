"""Listing store port (abstract interface).

The catalog itself is managed elsewhere; the ordering core only needs to read
a listing and flip its ``availability``. Every availability write goes through
``conditional_set_availability`` so that "is it available?" and "mark it
reserved" happen as one indivisible step in the store, whichever adapter
backs it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum


class Availability(Enum):
    AVAILABLE = "Available"
    RESERVED = "Reserved"


@dataclass(frozen=True)
class Listing:
    """A sellable unit as the catalog describes it."""

    listing_id: str
    name: str
    price: float
    category: str | None = None
    breed: str | None = None
    weight: str | None = None
    availability: str = Availability.AVAILABLE.value

    def with_availability(self, availability: Availability) -> "Listing":
        return replace(self, availability=availability.value)


class ListingStore(ABC):
    """Abstract listing store interface."""

    @abstractmethod
    def add(self, listing: Listing) -> None:
        """Insert or overwrite a listing (catalog management entry point)."""
        ...

    @abstractmethod
    def get(self, listing_id: str) -> Listing:
        """Return the listing or raise ``ListingNotFound``."""
        ...

    @abstractmethod
    def get_availability(self, listing_id: str) -> Availability:
        """Return the current availability or raise ``ListingNotFound``."""
        ...

    @abstractmethod
    def conditional_set_availability(
        self,
        listing_id: str,
        expected: Availability,
        new: Availability,
    ) -> bool:
        """Set ``new`` only if the current value equals ``expected``.

        Returns True when the write happened, False when the current value did
        not match. Raises ``ListingNotFound`` for unknown identifiers.
        """
        ...
