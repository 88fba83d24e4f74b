"""User store factory.

Provides get_user_store() / set_user_store(). Defaults to FakeUserStore; the
identity service adapter is plugged in at deployment time.
"""

from accounts.store.fake_store import FakeUserStore
from accounts.store.port import BasketItem, NotificationRecord, UserStore

__all__ = [
    "BasketItem",
    "NotificationRecord",
    "UserStore",
    "get_user_store",
    "reset_user_store",
    "set_user_store",
]

_current_store: UserStore | None = None


def get_user_store() -> UserStore:
    """Return the current user store. Defaults to FakeUserStore."""
    global _current_store
    if _current_store is None:
        _current_store = FakeUserStore()
    return _current_store


def set_user_store(store: UserStore) -> None:
    """Override the active user store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_user_store() -> None:
    """Reset to default user store."""
    global _current_store
    _current_store = None
