import pytest
from shared.db import drop_db, setup_db


@pytest.fixture(scope="session")
def _messaging_domain():
    """Initialize the messaging domain once per session."""
    from messaging.domain import messaging

    messaging.init()
    return messaging


@pytest.fixture(scope="session", autouse=True)
def _messaging_db(_messaging_domain):
    setup_db(_messaging_domain)

    yield

    drop_db(_messaging_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_messaging_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _messaging_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
