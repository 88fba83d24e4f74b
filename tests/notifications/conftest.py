import pytest
from notifications.inbox.emitter import NotificationEmitter


@pytest.fixture()
def emitter(user_store):
    return NotificationEmitter(user_store)
