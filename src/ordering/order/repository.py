"""Repository for the Order aggregate, with the listing queries the API needs."""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id) -> list[Order]:
        """Orders placed by one customer, newest first."""
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").all().items

    def newest_first(self) -> list[Order]:
        """Every order, newest first (staff view)."""
        return self._dao.query.order_by("-created_at").all().items
