import pytest
from shared.db import drop_db, setup_db


@pytest.fixture(scope="session")
def _marketplace_domain():
    """Initialize the marketplace domain once per session."""
    from marketplace.domain import marketplace

    marketplace.init()
    return marketplace


@pytest.fixture(scope="session", autouse=True)
def _marketplace_db(_marketplace_domain):
    setup_db(_marketplace_domain)

    yield

    drop_db(_marketplace_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_marketplace_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _marketplace_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def list_product():
    """Factory: list a product for a seller and return its id."""
    from marketplace.product.listing import ListProduct
    from protean import current_domain

    def _list(seller_id="seller-001", name="Spring Water", price=199.0, stock_quantity=10, size_ml=750, **kwargs):
        command = ListProduct(
            seller_id=seller_id,
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            size_ml=size_ml,
            **kwargs,
        )
        return current_domain.process(command, asynchronous=False)

    return _list


@pytest.fixture()
def add_to_cart():
    """Factory: put a product in a buyer's cart and return the cart item id."""
    from marketplace.cart.items import AddToCart
    from protean import current_domain

    def _add(product_id, quantity=1, buyer_id="buyer-001"):
        command = AddToCart(buyer_id=buyer_id, product_id=product_id, quantity=quantity)
        return current_domain.process(command, asynchronous=False)

    return _add
