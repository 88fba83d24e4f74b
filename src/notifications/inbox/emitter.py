"""Notification emitter: drops a record into a user's inbox.

Emission is best effort. The inbox lives in the user store, outside the order
transaction; a failed append is logged and dropped and never rolls back the
order change that triggered it.
"""

import time
from uuid import uuid4

import structlog
from accounts.store import NotificationRecord, UserStore, get_user_store

from notifications.inbox.types import Severity
from notifications.templates import get_template

logger = structlog.get_logger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


class NotificationEmitter:
    def __init__(self, user_store: UserStore | None = None) -> None:
        self._user_store = user_store

    @property
    def user_store(self) -> UserStore:
        return self._user_store if self._user_store is not None else get_user_store()

    def notify(self, user_id: str, notification_type: str, context: dict) -> NotificationRecord | None:
        """Render the template for ``notification_type`` and append it to the user's inbox.

        Returns the appended record, or None when the append failed.
        """
        template_cls = get_template(notification_type)
        rendered = template_cls.render(context)

        record = NotificationRecord(
            id=f"{template_cls.id_prefix}_{uuid4().hex[:12]}",
            title=rendered["title"],
            message=rendered["message"],
            icon=rendered.get("icon"),
            color=rendered.get("color", Severity.INFO.value),
            timestamp=_now_millis(),
            seen=False,
        )

        try:
            self.user_store.append_notification(str(user_id), record)
        except Exception as exc:
            logger.warning(
                "Failed to deliver notification",
                user_id=str(user_id),
                notification_type=notification_type,
                error=str(exc),
            )
            return None

        logger.info(
            "Notification delivered",
            user_id=str(user_id),
            notification_type=notification_type,
            notification_id=record.id,
        )
        return record
