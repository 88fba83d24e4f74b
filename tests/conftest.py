import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the domain.toml overlay. Each context's conftest activates its own
    domain through a DomainFixture.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    # Listings stay in memory unless a test builds a database-backed store itself
    os.environ.pop("LISTING_STORE_URI", None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def reset_stores():
    """Give every test fresh listing, user and proof stores."""
    from accounts.store import reset_user_store
    from inventory.listing import reset_listing_store
    from payments.proof import reset_proof_store

    reset_listing_store()
    reset_user_store()
    reset_proof_store()

    yield

    reset_listing_store()
    reset_user_store()
    reset_proof_store()


# ---------------------------------------------------------------------------
# Store fixtures shared by every context
# ---------------------------------------------------------------------------
@pytest.fixture()
def listing_store():
    from inventory.listing import get_listing_store

    return get_listing_store()


@pytest.fixture()
def user_store():
    from accounts.store import get_user_store

    return get_user_store()


@pytest.fixture()
def proof_store():
    from payments.proof import get_proof_store

    return get_proof_store()


@pytest.fixture()
def add_listings(listing_store):
    """Factory: add available listings by id and return them."""
    from inventory.listing import Listing

    def _add(*listing_ids, price=100.0, category="Goat", breed="Boer", weight="40 kg"):
        listings = []
        for listing_id in listing_ids:
            listing = Listing(
                listing_id=listing_id,
                name=f"{breed} {listing_id}",
                price=price,
                category=category,
                breed=breed,
                weight=weight,
            )
            listing_store.add(listing)
            listings.append(listing)
        return listings

    return _add
