"""Template registry: maps NotificationType to template classes.

Each template knows its id prefix and how to render title, message, icon and
severity color from event context data.
"""

from notifications.inbox.types import NotificationType
from notifications.templates.payment_rejected import PaymentRejectedTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.PAYMENT_REJECTED.value: PaymentRejectedTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
