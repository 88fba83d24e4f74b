"""Event handler: tells the owner their payment proof was rejected."""

import structlog
from notifications.inbox.emitter import NotificationEmitter
from notifications.inbox.types import NotificationType
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.order.events import PaymentRejected
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Order)
class PaymentRejectionNotifier:
    @handle(PaymentRejected)
    def on_payment_rejected(self, event: PaymentRejected) -> None:
        record = NotificationEmitter().notify(
            user_id=str(event.customer_id),
            notification_type=NotificationType.PAYMENT_REJECTED.value,
            context={
                "order_id": str(event.order_id),
                "reason": event.reason,
            },
        )
        if record is None:
            logger.warning(
                "Owner was not notified of payment rejection",
                order_id=str(event.order_id),
                customer_id=str(event.customer_id),
            )
