"""Fake user store: keeps baskets and inboxes in memory for testing."""

import threading

from accounts.store.port import BasketItem, NotificationRecord, UserStore


class FakeUserStore(UserStore):
    """User store that records everything in memory for test assertions."""

    def __init__(self):
        self.baskets: dict[str, list[BasketItem]] = {}
        self.inboxes: dict[str, list[NotificationRecord]] = {}
        self.should_succeed = True
        self.failure_reason = "Inbox unavailable"
        self._lock = threading.Lock()

    def configure(self, should_succeed: bool = True, failure_reason: str = "Inbox unavailable"):
        """Configure whether inbox appends succeed."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def put_in_basket(self, user_id: str, *items: BasketItem) -> None:
        with self._lock:
            self.baskets.setdefault(str(user_id), []).extend(items)

    def get_basket(self, user_id: str) -> list[BasketItem]:
        return list(self.baskets.get(str(user_id), []))

    def clear_basket(self, user_id: str) -> None:
        with self._lock:
            self.baskets[str(user_id)] = []

    def append_notification(self, user_id: str, record: NotificationRecord) -> None:
        if not self.should_succeed:
            raise ConnectionError(self.failure_reason)
        with self._lock:
            self.inboxes.setdefault(str(user_id), []).append(record)

    def list_notifications(self, user_id: str) -> list[NotificationRecord]:
        return list(self.inboxes.get(str(user_id), []))

    def reset(self):
        """Clear baskets and inboxes (useful between tests)."""
        self.baskets.clear()
        self.inboxes.clear()
        self.should_succeed = True
        self.failure_reason = "Inbox unavailable"
