"""Application tests for staff status writes."""

import pytest
from inventory.listing import Availability
from ordering.order.order import OrderStatus
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.exceptions import IllegalTransition

USER = "user-1"


@pytest.fixture()
def placed_order(lifecycle, add_listings, basket_item):
    add_listings("L1")
    return lifecycle.create_order(USER, [basket_item("L1")])


class TestSetOrderStatus:
    def test_ship_then_deliver(self, lifecycle, listing_store, placed_order):
        lifecycle.set_order_status(placed_order.id, OrderStatus.SHIPPED.value)
        order = lifecycle.set_order_status(placed_order.id, OrderStatus.DELIVERED.value)

        assert order.status == OrderStatus.DELIVERED.value
        # Sold animals stay reserved
        assert listing_store.get_availability("L1") == Availability.RESERVED

    def test_deliver_directly_from_processing(self, lifecycle, placed_order):
        order = lifecycle.set_order_status(placed_order.id, OrderStatus.DELIVERED.value)
        assert order.status == OrderStatus.DELIVERED.value

    def test_delivered_is_terminal(self, lifecycle, placed_order):
        lifecycle.set_order_status(placed_order.id, OrderStatus.DELIVERED.value)
        with pytest.raises(IllegalTransition):
            lifecycle.set_order_status(placed_order.id, OrderStatus.CANCELLED.value)

    def test_shipped_cannot_be_cancelled(self, lifecycle, listing_store, placed_order):
        lifecycle.set_order_status(placed_order.id, OrderStatus.SHIPPED.value)
        with pytest.raises(IllegalTransition):
            lifecycle.set_order_status(placed_order.id, OrderStatus.CANCELLED.value)
        assert listing_store.get_availability("L1") == Availability.RESERVED

    def test_unknown_status_rejected(self, lifecycle, placed_order):
        with pytest.raises(ValidationError) as exc:
            lifecycle.set_order_status(placed_order.id, "Teleported")
        assert not isinstance(exc.value, IllegalTransition)

    def test_payment_rejected_write_rejects_with_default_reason(self, lifecycle, user_store, placed_order):
        order = lifecycle.set_order_status(placed_order.id, OrderStatus.PAYMENT_REJECTED.value)

        assert order.status == OrderStatus.PAYMENT_REJECTED.value
        assert order.rejection_reason == "Invalid payment proof."
        assert len(user_store.list_notifications(USER)) == 1

    def test_unknown_order(self, lifecycle):
        with pytest.raises(ObjectNotFoundError):
            lifecycle.set_order_status("missing", OrderStatus.SHIPPED.value)
