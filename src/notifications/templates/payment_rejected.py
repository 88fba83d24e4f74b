"""Payment rejected template: sent when staff reject an order's payment proof."""

from notifications.inbox.types import NotificationType, Severity


class PaymentRejectedTemplate:
    notification_type = NotificationType.PAYMENT_REJECTED.value
    id_prefix = "rej"

    @staticmethod
    def render(context: dict) -> dict:
        order_id = str(context.get("order_id", "N/A"))
        reason = context.get("reason", "Invalid payment proof.")
        return {
            "title": "Payment Rejected",
            "message": f"Order #{order_id[-6:]} proof rejected: {reason}",
            "icon": "alert-circle",
            "color": Severity.DANGER.value,
        }
