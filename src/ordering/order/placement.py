"""Order placement: command and handler.

The handler only persists the order. Reserving the listings beforehand and
releasing them if persistence fails is the job of the lifecycle service, which
sits outside the unit of work.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(max_length=255)
    items = Text(required=True)  # JSON: list of listing snapshot dicts
    total = Float(required=True)
    order_date = String(max_length=50)
    delivery_address = Text()  # JSON: address dict
    payment_proof_ref = String(max_length=255)
    payment_proof_content_type = String(max_length=100)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        delivery_address = (
            json.loads(command.delivery_address)
            if isinstance(command.delivery_address, str)
            else command.delivery_address
        )

        order = Order.place(
            order_id=command.order_id,
            customer_id=command.customer_id,
            items_data=items_data,
            total=command.total,
            customer_name=command.customer_name,
            order_date=command.order_date,
            delivery_address=delivery_address,
            payment_proof_ref=command.payment_proof_ref,
            payment_proof_content_type=command.payment_proof_content_type,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
