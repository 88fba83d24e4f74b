import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def basket_item():
    """Factory: build a basket entry for a listing id."""
    from accounts.store import BasketItem

    def _item(listing_id, price=100.0, name=None):
        return BasketItem(
            listing_id=listing_id,
            name=name or f"Boer {listing_id}",
            price=price,
            category="Goat",
            breed="Boer",
            weight="40 kg",
        )

    return _item


@pytest.fixture()
def lifecycle():
    from ordering.order.lifecycle import OrderLifecycle

    return OrderLifecycle()
