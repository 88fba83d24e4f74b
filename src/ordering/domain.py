"""Ordering bounded context: orders, reservations and payment proofs.

Owns the order lifecycle for livestock listings: placing an order reserves
its listings, cancellation releases them, and staff review the payment proof
attached by the customer.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
