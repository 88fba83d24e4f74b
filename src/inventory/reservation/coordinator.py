"""Reservation coordinator: all-or-nothing claims on listings.

A batch of listing ids is reserved by flipping each one from Available to
Reserved with the store's conditional update. The listing id is the unit of
mutual exclusion: two overlapping batches can interleave freely, yet at most
one of them wins any given listing.

Every batch flips its listings in sorted id order, whatever order the caller
gave. Two overlapping batches therefore contend for their shared listings in
the same sequence, and the one that wins the first shared listing goes on to
win the rest, as if the batches had run one after the other.

If a flip fails, every listing already flipped by the same batch is put back
to Available before the outcome is returned, so a failed batch never leaves a
partial reservation behind. The ids after the failing one are only read (not
flipped) to report which of them are unavailable too. Outcomes list ids in the
caller's order.
"""

from dataclasses import dataclass, field

import structlog
from shared.exceptions import ListingNotFound, StorageFault

from inventory.listing import Availability, ListingStore, get_listing_store

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReservationOutcome:
    """Result of a reservation attempt."""

    success: bool
    reserved_ids: tuple[str, ...] = ()
    conflicting_ids: tuple[str, ...] = field(default_factory=tuple)


def _distinct(listing_ids) -> list[str]:
    """Deduplicate while keeping the caller's order."""
    seen: dict[str, None] = {}
    for listing_id in listing_ids:
        seen.setdefault(str(listing_id), None)
    return list(seen)


class ReservationCoordinator:
    def __init__(self, store: ListingStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> ListingStore:
        return self._store if self._store is not None else get_listing_store()

    def reserve(self, listing_ids) -> ReservationOutcome:
        """Reserve every listing in the batch, or none of them."""
        ids = _distinct(listing_ids)
        flip_order = sorted(ids)
        store = self.store
        flipped: list[str] = []

        for position, listing_id in enumerate(flip_order):
            try:
                won = store.conditional_set_availability(listing_id, Availability.AVAILABLE, Availability.RESERVED)
            except ListingNotFound:
                won = False
            except Exception as exc:
                self._roll_back(flipped)
                logger.error(
                    "Listing store failed during reservation",
                    listing_id=listing_id,
                    error=str(exc),
                )
                raise StorageFault() from exc

            if won:
                flipped.append(listing_id)
                continue

            self._roll_back(flipped)
            unavailable = {listing_id}
            unavailable.update(lid for lid in flip_order[position + 1 :] if not self._is_available(lid))
            conflicts = [lid for lid in ids if lid in unavailable]
            logger.info(
                "Reservation refused",
                requested=ids,
                conflicting=conflicts,
            )
            return ReservationOutcome(success=False, conflicting_ids=tuple(conflicts))

        logger.info("Listings reserved", listing_ids=ids)
        return ReservationOutcome(success=True, reserved_ids=tuple(ids))

    def release(self, listing_ids) -> None:
        """Return listings to Available. Already-available or unknown ids are a no-op.

        Every id is attempted even when the store fails on one of them; the
        ids it could not release are then named in a StorageFault.
        """
        store = self.store
        failures = []
        for listing_id in _distinct(listing_ids):
            try:
                released = store.conditional_set_availability(
                    listing_id, Availability.RESERVED, Availability.AVAILABLE
                )
            except ListingNotFound:
                logger.warning("Cannot release unknown listing", listing_id=listing_id)
                continue
            except Exception as exc:
                failures.append(listing_id)
                logger.error(
                    "Listing store failed during release",
                    listing_id=listing_id,
                    error=str(exc),
                )
                continue

            if released:
                logger.info("Listing released", listing_id=listing_id)

        if failures:
            raise StorageFault(f"Could not release listings {', '.join(failures)}")

    def _roll_back(self, flipped: list[str]) -> None:
        failures = []
        for listing_id in reversed(flipped):
            try:
                self.store.conditional_set_availability(listing_id, Availability.RESERVED, Availability.AVAILABLE)
            except Exception as exc:
                failures.append(listing_id)
                logger.error(
                    "Failed to roll back reservation",
                    listing_id=listing_id,
                    error=str(exc),
                )
        if failures:
            raise StorageFault(f"Could not roll back reservations for {', '.join(failures)}")

    def _is_available(self, listing_id: str) -> bool:
        try:
            return self.store.get_availability(listing_id) == Availability.AVAILABLE
        except ListingNotFound:
            return False
