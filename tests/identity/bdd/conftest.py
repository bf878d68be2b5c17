"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from identity.profile.events import BusinessRegistered, SellerApproved
from identity.profile.profile import Profile
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup
_EVENT_CLASSES = {
    "BusinessRegistered": BusinessRegistered,
    "SellerApproved": SellerApproved,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given("a registered seller", target_fixture="profile")
def registered_seller():
    profile = Profile.register(user_id="seller-001", email="seller@example.com", full_name="Seller", role="seller")
    profile._events.clear()
    return profile


@given("a registered buyer", target_fixture="profile")
def registered_buyer():
    profile = Profile.register(user_id="buyer-001", email="buyer@example.com", full_name="Buyer")
    profile._events.clear()
    return profile


@then(parsers.cfparse("a {event_name} event is raised"))
def event_raised(profile, event_name):
    event_cls = _EVENT_CLASSES[event_name]
    assert any(isinstance(e, event_cls) for e in profile._events)


@then(parsers.cfparse('the action fails with a validation error on "{field}"'))
def validation_failed(error, field):
    assert isinstance(error["exc"], ValidationError)
    assert field in error["exc"].messages
