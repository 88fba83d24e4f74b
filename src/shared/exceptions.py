"""Error kinds shared by the ordering core and its collaborators.

Domain refusals follow Protean's convention: they are ``ValidationError``
subclasses carrying a ``{field: [messages]}`` dict. Lookups that miss
surface as ``ObjectNotFoundError`` (or a subclass of it), so callers can
treat every "not found" uniformly.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class IllegalTransition(ValidationError):
    """The order state machine does not allow the requested transition."""


class ListingNotFound(ObjectNotFoundError):
    """No listing exists with the requested identifier."""


class ProofNotFound(ObjectNotFoundError):
    """The order has no payment proof attached (or the blob is gone)."""


class ReservationConflict(Exception):
    """One or more listings in a basket could not be reserved.

    ``listing_ids`` names every listing that was unavailable, so a client can
    trim its basket and retry without guessing.
    """

    def __init__(self, listing_ids):
        self.listing_ids = list(listing_ids)
        super().__init__(f"Listings unavailable: {', '.join(self.listing_ids)}")


class Forbidden(Exception):
    """The requester does not own the resource it tried to act on."""

    def __init__(self, message="Requester does not own this order"):
        self.message = message
        super().__init__(message)


class StorageFault(Exception):
    """Persistence was unavailable. Safe to retry; no reservation is left behind."""

    def __init__(self, message="Storage unavailable, please retry"):
        self.message = message
        super().__init__(message)
