"""Application tests for order listings: per customer and staff views."""

from ordering.order.order import OrderStatus


class TestOrderQueries:
    def test_orders_for_returns_only_own_orders(self, lifecycle, add_listings, basket_item):
        add_listings("L1", "L2", "L3")
        lifecycle.create_order("user-a", [basket_item("L1")])
        lifecycle.create_order("user-b", [basket_item("L2")])
        lifecycle.create_order("user-a", [basket_item("L3")])

        orders = lifecycle.orders_for("user-a")

        assert len(orders) == 2
        assert all(str(order.customer_id) == "user-a" for order in orders)

    def test_orders_for_is_newest_first(self, lifecycle, add_listings, basket_item):
        add_listings("L1", "L2")
        first = lifecycle.create_order("user-a", [basket_item("L1")])
        second = lifecycle.create_order("user-a", [basket_item("L2")])

        assert [order.id for order in lifecycle.orders_for("user-a")] == [second.id, first.id]

    def test_orders_for_unknown_user_is_empty(self, lifecycle):
        assert lifecycle.orders_for("nobody") == []

    def test_all_orders_includes_every_customer(self, lifecycle, add_listings, basket_item):
        add_listings("L1", "L2")
        lifecycle.create_order("user-a", [basket_item("L1")])
        lifecycle.create_order("user-b", [basket_item("L2")])

        assert {str(order.customer_id) for order in lifecycle.all_orders()} == {"user-a", "user-b"}

    def test_cancelled_orders_are_kept(self, lifecycle, add_listings, basket_item):
        add_listings("L1")
        order = lifecycle.create_order("user-a", [basket_item("L1")])
        lifecycle.cancel_order(order.id, requester_id="user-a")

        [kept] = lifecycle.all_orders()
        assert kept.status == OrderStatus.CANCELLED.value
