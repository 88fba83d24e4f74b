"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from accounts.store import BasketItem
from inventory.listing import Availability, Listing
from pytest_bdd import given, parsers, then
from shared.exceptions import IllegalTransition


def _ids(listing_ids: str) -> list[str]:
    return [listing_id.strip() for listing_id in listing_ids.split(",") if listing_id.strip()]


def _basket(listing_ids: str) -> list[BasketItem]:
    return [BasketItem(listing_id=listing_id, name=f"Boer {listing_id}", price=100.0) for listing_id in _ids(listing_ids)]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured refusals."""
    return {"exc": None}


@pytest.fixture()
def current():
    """Holds the order the scenario is about."""
    return {"order": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('listings "{listing_ids}" are available'))
def listings_available(listing_store, listing_ids):
    for listing_id in _ids(listing_ids):
        listing_store.add(Listing(listing_id=listing_id, name=f"Boer {listing_id}", price=100.0))


@given(parsers.cfparse('"{user_id}" has ordered "{listing_ids}"'))
def has_ordered(lifecycle, current, user_id, listing_ids):
    current["order"] = lifecycle.create_order(user_id, _basket(listing_ids))


@given(parsers.cfparse('staff set the order status to "{status}"'))
def staff_set_status_given(lifecycle, current, status):
    current["order"] = lifecycle.set_order_status(current["order"].id, status)


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(lifecycle, current, status):
    assert lifecycle.get_order(current["order"].id).status == status


@then(parsers.cfparse('listing "{listing_id}" is "{availability}"'))
def listing_is(listing_store, listing_id, availability):
    assert listing_store.get_availability(listing_id) == Availability(availability)


@then("the action is refused as an illegal transition")
def refused_as_illegal(error):
    assert error["exc"] is not None, "Expected a refusal but none was raised"
    assert isinstance(error["exc"], IllegalTransition)


@then(parsers.cfparse('"{user_id}" has {count:d} notification'))
def has_notifications(user_store, user_id, count):
    assert len(user_store.list_notifications(user_id)) == count
