"""Order lifecycle service: the operations the API exposes.

Each operation validates at the boundary, then issues the matching command.
Order creation is the one multi-step flow:

    1. Reserve every listing in the basket (all-or-nothing)
    2. Store the payment proof, if one came with the order
    3. Persist the order in Processing
    4. Clear the customer's basket

A failed reservation aborts before anything is written. A failure in step 2
or 3 releases the reservation and drops any stored proof before the error
reaches the caller, so no listing is ever left Reserved without a persisted
order.

Cancellation (by the owner or by staff) saves the order first and then
releases its listings. If the release fails the caller gets a StorageFault and
``release_listings`` finishes the job later.
"""

import json
from uuid import uuid4

import structlog
from accounts.store import BasketItem, UserStore, get_user_store
from inventory.reservation.coordinator import ReservationCoordinator
from payments.proof import ProofBlob, ProofStore, get_proof_store
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from shared.exceptions import Forbidden, IllegalTransition, ProofNotFound, ReservationConflict, StorageFault

from ordering.order.cancellation import CancelOrder
from ordering.order.order import Order, OrderStatus
from ordering.order.payment import RejectPayment, SubmitPaymentProof
from ordering.order.placement import PlaceOrder
from ordering.order.status import SetOrderStatus

logger = structlog.get_logger(__name__)

_SNAPSHOT_FIELDS = ("listing_id", "name", "price", "category", "breed", "weight")


def _snapshot(item) -> dict:
    """Turn a basket entry (BasketItem or dict) into a listing snapshot dict."""
    if isinstance(item, BasketItem):
        data = {name: getattr(item, name) for name in _SNAPSHOT_FIELDS}
    else:
        data = {name: item.get(name) for name in _SNAPSHOT_FIELDS}

    if not data["listing_id"]:
        raise ValidationError({"items": ["Every basket item needs a listing_id"]})
    if data["price"] is None or float(data["price"]) < 0:
        raise ValidationError({"items": [f"Listing {data['listing_id']} has an invalid price"]})

    data["listing_id"] = str(data["listing_id"])
    data["price"] = float(data["price"])
    return data


class OrderLifecycle:
    def __init__(
        self,
        coordinator: ReservationCoordinator | None = None,
        user_store: UserStore | None = None,
        proof_store: ProofStore | None = None,
    ) -> None:
        self.coordinator = coordinator or ReservationCoordinator()
        self._user_store = user_store
        self._proof_store = proof_store

    @property
    def user_store(self) -> UserStore:
        return self._user_store if self._user_store is not None else get_user_store()

    @property
    def proof_store(self) -> ProofStore:
        return self._proof_store if self._proof_store is not None else get_proof_store()

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, order_id) -> Order:
        return current_domain.repository_for(Order).get(order_id)

    def orders_for(self, user_id) -> list[Order]:
        return current_domain.repository_for(Order).for_customer(user_id)

    def all_orders(self) -> list[Order]:
        return current_domain.repository_for(Order).newest_first()

    def get_proof(self, order_id) -> ProofBlob:
        order = self.get_order(order_id)
        if not order.payment_proof_ref:
            raise ProofNotFound({"payment_proof": [f"Order {order_id} has no payment proof"]})
        return self.proof_store.get(order.payment_proof_ref)

    # -------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------
    def create_order(
        self,
        user_id,
        basket_items=None,
        total=None,
        customer_name=None,
        order_date=None,
        delivery_address=None,
        proof: ProofBlob | None = None,
    ) -> Order:
        """Reserve the basket's listings and persist an order for them.

        When ``basket_items`` is None the basket is read from the user store.
        Raises ReservationConflict naming every unavailable listing.
        """
        if basket_items is None:
            basket_items = self.user_store.get_basket(user_id)

        snapshots: dict[str, dict] = {}
        for item in basket_items:
            snapshot = _snapshot(item)
            snapshots.setdefault(snapshot["listing_id"], snapshot)
        if not snapshots:
            raise ValidationError({"items": ["Basket is empty"]})

        if total is None:
            total = sum(snapshot["price"] for snapshot in snapshots.values())
        if total < 0:
            raise ValidationError({"total": ["Total cannot be negative"]})

        outcome = self.coordinator.reserve(list(snapshots))
        if not outcome.success:
            raise ReservationConflict(outcome.conflicting_ids)

        order_id = str(uuid4())
        proof_ref = None
        try:
            if proof is not None:
                proof_ref = self.proof_store.put(order_id, proof)
            current_domain.process(
                PlaceOrder(
                    order_id=order_id,
                    customer_id=str(user_id),
                    customer_name=customer_name,
                    items=json.dumps(list(snapshots.values())),
                    total=total,
                    order_date=order_date,
                    delivery_address=json.dumps(delivery_address) if delivery_address else None,
                    payment_proof_ref=proof_ref,
                    payment_proof_content_type=proof.content_type if proof is not None else None,
                ),
                asynchronous=False,
            )
        except ValidationError:
            self._discard_proof(proof_ref)
            self.coordinator.release(outcome.reserved_ids)
            raise
        except Exception as exc:
            self._discard_proof(proof_ref)
            self.coordinator.release(outcome.reserved_ids)
            logger.error(
                "Order persistence failed, reservation rolled back",
                customer_id=str(user_id),
                listing_ids=list(outcome.reserved_ids),
                error=str(exc),
            )
            raise StorageFault() from exc

        self._clear_basket(user_id)
        logger.info(
            "Order placed",
            order_id=order_id,
            customer_id=str(user_id),
            listing_ids=list(outcome.reserved_ids),
        )
        return self.get_order(order_id)

    def _clear_basket(self, user_id) -> None:
        try:
            self.user_store.clear_basket(str(user_id))
        except Exception as exc:
            # The order is already persisted; clearing the basket is best effort
            logger.warning("Failed to clear basket", customer_id=str(user_id), error=str(exc))

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def cancel_order(self, order_id, requester_id) -> Order:
        current_domain.process(
            CancelOrder(order_id=order_id, requester_id=str(requester_id)),
            asynchronous=False,
        )
        order = self.get_order(order_id)
        self._release_listings(order)
        return order

    def set_order_status(self, order_id, new_status) -> Order:
        if new_status not in {status.value for status in OrderStatus}:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]})

        current_domain.process(
            SetOrderStatus(order_id=order_id, status=new_status),
            asynchronous=False,
        )
        order = self.get_order(order_id)
        if order.status == OrderStatus.CANCELLED.value:
            self._release_listings(order)
        return order

    def release_listings(self, order_id) -> Order:
        """Put a cancelled order's listings back on sale.

        Cancelling saves the order before its listings are released. When the
        listing store fails in between, the order is Cancelled and its listings
        stay Reserved; staff run this to finish the release. Repeating it is
        harmless.
        """
        order = self.get_order(order_id)
        if order.status != OrderStatus.CANCELLED.value:
            raise IllegalTransition(
                {"status": [f"Only cancelled orders release their listings, order {order_id} is {order.status}"]}
            )
        self._release_listings(order)
        return order

    def _release_listings(self, order: Order) -> None:
        try:
            self.coordinator.release(order.listing_ids)
        except StorageFault as exc:
            logger.error(
                "Cancelled order still holds its listings",
                order_id=str(order.id),
                listing_ids=order.listing_ids,
                error=exc.message,
            )
            raise StorageFault(
                f"Order {order.id} is cancelled but its listings are still reserved, retry the release"
            ) from exc

    def reject_payment(self, order_id, reason=None) -> Order:
        current_domain.process(
            RejectPayment(order_id=order_id, reason=reason),
            asynchronous=False,
        )
        return self.get_order(order_id)

    def resubmit_proof(self, order_id, requester_id, blob: ProofBlob) -> Order:
        """Store a new proof for the order and hand it back to staff review.

        The blob the new proof replaces is deleted once the order points at the
        new one. A refused resubmission deletes the blob it just stored.
        """
        if not blob.data:
            raise ValidationError({"payment_proof": ["Payment proof is empty"]})

        # Existence and ownership are checked before any bytes are stored
        order = self.get_order(order_id)
        if not order.is_owned_by(requester_id):
            raise Forbidden(f"Order {order_id} does not belong to {requester_id}")

        previous_ref = order.payment_proof_ref
        proof_ref = self.proof_store.put(str(order.id), blob)
        try:
            current_domain.process(
                SubmitPaymentProof(
                    order_id=order_id,
                    requester_id=str(requester_id),
                    proof_ref=proof_ref,
                    content_type=blob.content_type,
                ),
                asynchronous=False,
            )
        except Exception:
            self._discard_proof(proof_ref)
            raise

        if previous_ref and previous_ref != proof_ref:
            self._discard_proof(previous_ref)
        return self.get_order(order_id)

    def _discard_proof(self, reference) -> None:
        if not reference:
            return
        try:
            self.proof_store.delete(reference)
        except Exception as exc:
            logger.warning("Failed to delete payment proof", proof_ref=reference, error=str(exc))
