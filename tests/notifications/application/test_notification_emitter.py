"""Tests for NotificationEmitter: inbox appends and swallowed failures."""

import time

from notifications.inbox.types import NotificationType

_CONTEXT = {"order_id": "ord-abc123", "reason": "Amount does not match"}


class TestNotify:
    def test_appends_one_record(self, emitter, user_store):
        emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)

        records = user_store.list_notifications("user-1")
        assert len(records) == 1
        assert records[0].title == "Payment Rejected"
        assert records[0].message == "Order #abc123 proof rejected: Amount does not match"

    def test_record_is_unseen_with_fresh_id_and_timestamp(self, emitter):
        before = int(time.time() * 1000)
        record = emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)
        after = int(time.time() * 1000)

        assert record.seen is False
        assert record.id.startswith("rej_")
        assert before <= record.timestamp <= after

    def test_each_notification_gets_its_own_id(self, emitter, user_store):
        emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)
        emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)

        ids = [record.id for record in user_store.list_notifications("user-1")]
        assert len(set(ids)) == 2

    def test_inboxes_are_per_user(self, emitter, user_store):
        emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)
        assert user_store.list_notifications("user-2") == []

    def test_to_dict_carries_every_field(self, emitter):
        record = emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)
        assert set(record.to_dict()) == {"id", "title", "message", "icon", "color", "timestamp", "seen"}


class TestDeliveryFailure:
    def test_failure_is_swallowed(self, emitter, user_store):
        user_store.configure(should_succeed=False, failure_reason="inbox offline")

        record = emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)

        assert record is None
        assert user_store.list_notifications("user-1") == []

    def test_recovers_once_store_is_healthy(self, emitter, user_store):
        user_store.configure(should_succeed=False)
        emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT)
        user_store.configure(should_succeed=True)

        assert emitter.notify("user-1", NotificationType.PAYMENT_REJECTED.value, _CONTEXT) is not None
        assert len(user_store.list_notifications("user-1")) == 1
