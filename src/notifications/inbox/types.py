"""Notification kinds and severity tags (the inbox renders severity as a color)."""

from enum import Enum


class NotificationType(Enum):
    PAYMENT_REJECTED = "PaymentRejected"


class Severity(Enum):
    INFO = "blue"
    SUCCESS = "green"
    WARNING = "orange"
    DANGER = "red"
