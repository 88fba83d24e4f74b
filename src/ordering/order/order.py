"""Order aggregate (CQRS): the core of the ordering domain.

An order is a snapshot of a purchase: the listings it claims are copied in at
placement time, so later catalog edits never rewrite history. Only the status
(and the rejection reason that goes with it) moves after that.

State Machine (5 states):
    PROCESSING → SHIPPED → DELIVERED
    PROCESSING → DELIVERED
    PROCESSING ⇄ PAYMENT_REJECTED (staff rejects proof / owner resubmits)
    PROCESSING, PAYMENT_REJECTED → CANCELLED
    DELIVERED, CANCELLED are terminal
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String, ValueObject
from shared.exceptions import Forbidden, IllegalTransition

from ordering.domain import ordering
from ordering.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentProofSubmitted,
    PaymentRejected,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PROCESSING = "Processing"
    PAYMENT_REJECTED = "Payment Rejected"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class Actor(Enum):
    CUSTOMER = "Customer"
    STAFF = "Staff"


DEFAULT_REJECTION_REASON = "Invalid payment proof."

# Status writes staff may make from each state
_STAFF_TRANSITIONS = {
    OrderStatus.PROCESSING: {
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
        OrderStatus.PAYMENT_REJECTED,
    },
    OrderStatus.PAYMENT_REJECTED: {
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# States in which a payment proof may be (re)attached
_PROOF_ACCEPTING_STATES = {OrderStatus.PROCESSING, OrderStatus.PAYMENT_REJECTED}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class DeliveryAddress:
    """Where the animals go, captured at order time and never updated afterwards."""

    name = String(max_length=255)
    phone = String(max_length=30)
    line1 = String(max_length=255)
    line2 = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    pincode = String(max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class ListingSnapshot:
    """Copy of a listing's descriptive fields as they were when the order was placed."""

    listing_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    breed = String(max_length=100)
    weight = String(max_length=50)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer_name = String(max_length=255)
    items = HasMany(ListingSnapshot)
    total = Float(required=True, min_value=0.0)
    order_date = String(max_length=50)  # as supplied by the client
    delivery_address = ValueObject(DeliveryAddress)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PROCESSING.value,
    )
    rejection_reason = String(max_length=500)
    payment_proof_ref = String(max_length=255)
    payment_proof_content_type = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_id,
        customer_id,
        items_data,
        total,
        customer_name=None,
        order_date=None,
        delivery_address=None,
        payment_proof_ref=None,
        payment_proof_content_type=None,
    ):
        """Create an order for listings that have already been reserved.

        Args:
            order_id: Pre-generated identity (the proof blob may already be stored under it).
            customer_id: The user placing the order.
            items_data: List of dicts with listing_id, name, price, category, breed, weight.
            total: Amount the customer agreed to pay.
            delivery_address: Dict with name, phone, line1, line2, city, state, pincode.
        """
        if not items_data:
            raise ValidationError({"items": ["An order must contain at least one listing"]})

        now = datetime.now(UTC)
        order = cls(
            id=order_id,
            customer_id=customer_id,
            customer_name=customer_name,
            items=[ListingSnapshot(**item) for item in items_data],
            total=total,
            order_date=order_date or now.date().isoformat(),
            delivery_address=DeliveryAddress(**delivery_address) if delivery_address else None,
            status=OrderStatus.PROCESSING.value,
            payment_proof_ref=payment_proof_ref,
            payment_proof_content_type=payment_proof_content_type,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                listing_ids=json.dumps(order.listing_ids),
                total=total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @property
    def listing_ids(self) -> list[str]:
        return [str(item.listing_id) for item in self.items]

    def is_owned_by(self, requester_id) -> bool:
        return str(self.customer_id) == str(requester_id)

    def _assert_owned_by(self, requester_id):
        if not self.is_owned_by(requester_id):
            raise Forbidden(f"Order {self.id} does not belong to {requester_id}")

    def _move_to(self, target, actor):
        """Record a status change and its events. Callers validate first."""
        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=previous,
                new_status=target.value,
                changed_by=actor.value,
                changed_at=now,
            )
        )

        if target == OrderStatus.CANCELLED:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    listing_ids=json.dumps(self.listing_ids),
                    cancelled_by=actor.value,
                    cancelled_at=now,
                )
            )

    # -------------------------------------------------------------------
    # Owner actions
    # -------------------------------------------------------------------
    def cancel(self, requester_id):
        """Owner cancellation. Only a Processing order can be cancelled."""
        self._assert_owned_by(requester_id)

        if OrderStatus(self.status) != OrderStatus.PROCESSING:
            raise IllegalTransition({"status": [f"Cannot cancel an order in {self.status} state"]})

        self._move_to(OrderStatus.CANCELLED, Actor.CUSTOMER)

    def attach_proof(self, requester_id, proof_ref, content_type=None):
        """Attach or replace the payment proof; a rejected order goes back to Processing."""
        self._assert_owned_by(requester_id)

        current = OrderStatus(self.status)
        if current not in _PROOF_ACCEPTING_STATES:
            raise IllegalTransition({"status": [f"Cannot submit payment proof for an order in {self.status} state"]})

        now = datetime.now(UTC)
        self.payment_proof_ref = proof_ref
        self.payment_proof_content_type = content_type
        self.rejection_reason = None
        if current == OrderStatus.PAYMENT_REJECTED:
            self.status = OrderStatus.PROCESSING.value
        self.updated_at = now

        self.raise_(
            PaymentProofSubmitted(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                proof_ref=proof_ref,
                previous_status=current.value,
                submitted_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Staff actions
    # -------------------------------------------------------------------
    def reject_payment(self, reason=None):
        """Reject the payment proof. Only a Processing order can be rejected."""
        if OrderStatus(self.status) != OrderStatus.PROCESSING:
            raise IllegalTransition({"status": [f"Cannot reject payment for an order in {self.status} state"]})

        reason = reason or DEFAULT_REJECTION_REASON
        now = datetime.now(UTC)
        self.status = OrderStatus.PAYMENT_REJECTED.value
        self.rejection_reason = reason
        self.updated_at = now

        self.raise_(
            PaymentRejected(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                reason=reason,
                rejected_at=now,
            )
        )

    def set_status(self, new_status):
        """Staff status write, restricted to the allow-list in _STAFF_TRANSITIONS."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        current = OrderStatus(self.status)
        if target not in _STAFF_TRANSITIONS.get(current, set()):
            raise IllegalTransition({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        if target == OrderStatus.PAYMENT_REJECTED:
            self.reject_payment()
        else:
            self._move_to(target, Actor.STAFF)
