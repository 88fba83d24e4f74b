"""Tests for the payment rejected template and the template registry."""

import pytest
from notifications.inbox.types import NotificationType, Severity
from notifications.templates import get_template
from notifications.templates.payment_rejected import PaymentRejectedTemplate


class TestPaymentRejectedTemplate:
    def test_renders_title_and_message(self):
        rendered = PaymentRejectedTemplate.render({"order_id": "ord-12345678abcdef", "reason": "Blurry image"})

        assert rendered["title"] == "Payment Rejected"
        assert rendered["message"] == "Order #abcdef proof rejected: Blurry image"

    def test_uses_danger_severity(self):
        rendered = PaymentRejectedTemplate.render({"order_id": "ord-1", "reason": "x"})
        assert rendered["icon"] == "alert-circle"
        assert rendered["color"] == Severity.DANGER.value == "red"

    def test_short_order_id_is_used_whole(self):
        rendered = PaymentRejectedTemplate.render({"order_id": "ab1", "reason": "x"})
        assert rendered["message"].startswith("Order #ab1 ")

    def test_missing_reason_falls_back_to_default(self):
        rendered = PaymentRejectedTemplate.render({"order_id": "ord-000001"})
        assert rendered["message"].endswith("Invalid payment proof.")


class TestTemplateRegistry:
    def test_lookup_by_type(self):
        assert get_template(NotificationType.PAYMENT_REJECTED.value) is PaymentRejectedTemplate

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            get_template("Unknown")
