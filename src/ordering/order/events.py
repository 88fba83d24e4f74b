"""Domain events for the Order aggregate.

Events are immutable facts raised by the aggregate and dispatched when the
unit of work commits. PaymentRejected has a handler in this context that
notifies the order's owner. Releasing a cancelled order's listings is done by
OrderLifecycle once the cancellation is saved.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A basket was converted into an order after its listings were reserved."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    listing_ids = Text(required=True)  # JSON list of listing ids
    total = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """Staff (or the owner, for cancellation) moved the order to a new status."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order reached Cancelled; its listings must go back on sale."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    listing_ids = Text(required=True)  # JSON list of listing ids
    cancelled_by = String(required=True)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentRejected:
    """Staff rejected the payment proof attached to the order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String(required=True)
    rejected_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentProofSubmitted:
    """The owner attached (or replaced) the payment proof."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    proof_ref = String(required=True)
    previous_status = String(required=True)
    submitted_at = DateTime(required=True)
