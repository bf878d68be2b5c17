"""Shared BDD fixtures and step definitions for the Marketplace domain."""

import pytest
from marketplace.order.order import Order
from marketplace.product.listing import ListProduct
from marketplace.product.product import Product
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def catalogue():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the checkout result or the raised exception."""
    return {"result": None, "exc": None}


@given(parsers.cfparse('seller "{seller_id}" lists "{name}" at {price:f} with {stock:d} in stock'))
def seller_lists(catalogue, seller_id, name, price, stock):
    catalogue[name] = current_domain.process(
        ListProduct(seller_id=seller_id, name=name, price=price, stock_quantity=stock, size_ml=750),
        asynchronous=False,
    )


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock(catalogue, name, stock):
    assert current_domain.repository_for(Product).get(catalogue[name]).stock_quantity == stock


@then(parsers.cfparse("{count:d} orders are placed"))
def orders_placed(count):
    assert len(current_domain.repository_for(Order).for_buyer("buyer-001")) == count
