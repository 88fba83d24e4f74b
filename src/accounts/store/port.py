"""User store port: the parts of a user record the ordering core touches.

Registration, sessions and address books live with the identity service. The
ordering core reads and clears a user's basket and appends to their
notification inbox; nothing else.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class BasketItem:
    """A listing a user has put in their basket, with client-captured details."""

    listing_id: str
    name: str
    price: float
    category: str | None = None
    breed: str | None = None
    weight: str | None = None


@dataclass
class NotificationRecord:
    """One entry in a user's inbox. Only the inbox owner flips ``seen``."""

    id: str
    title: str
    message: str
    icon: str | None = None
    color: str | None = None
    timestamp: int = 0  # epoch milliseconds
    seen: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "icon": self.icon,
            "color": self.color,
            "timestamp": self.timestamp,
            "seen": self.seen,
        }


class UserStore(ABC):
    """Abstract user store interface."""

    @abstractmethod
    def get_basket(self, user_id: str) -> list[BasketItem]:
        ...

    @abstractmethod
    def clear_basket(self, user_id: str) -> None:
        ...

    @abstractmethod
    def append_notification(self, user_id: str, record: NotificationRecord) -> None:
        """Append one record to the user's inbox. May raise on transport failure."""
        ...

    @abstractmethod
    def list_notifications(self, user_id: str) -> list[NotificationRecord]:
        ...
