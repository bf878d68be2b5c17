"""Tests for the Product aggregate."""

import pytest
from marketplace.product.events import ProductListed, ProductUpdated, StockDecremented
from marketplace.product.product import Product
from protean.exceptions import ValidationError


def _product(**overrides):
    kwargs = {"seller_id": "seller-001", "name": "Spring Water", "size_ml": 500, "price": 120.0, "stock_quantity": 10}
    kwargs.update(overrides)
    product = Product.list_for_sale(**kwargs)
    product._events.clear()
    return product


class TestListForSale:
    def test_list_product(self):
        product = Product.list_for_sale(
            seller_id="seller-001",
            name="Mineral Water",
            size_ml=750,
            price=199.0,
            stock_quantity=25,
            images=["https://cdn.example.com/a.jpg"],
            certifications={"bis": "IS 14543"},
        )
        assert product.is_active is True
        assert product.image_urls == ["https://cdn.example.com/a.jpg"]
        assert product.certification_map == {"bis": "IS 14543"}

        event = product._events[0]
        assert isinstance(event, ProductListed)
        assert event.seller_id == "seller-001"
        assert event.stock_quantity == 25

    @pytest.mark.parametrize("size_ml", [250, 1000])
    def test_only_supported_bottle_sizes(self, size_ml):
        with pytest.raises(ValidationError) as exc:
            _product(size_ml=size_ml)
        assert "size_ml" in exc.value.messages

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _product(price=0)

    def test_wholesale_price_must_be_positive_when_set(self):
        with pytest.raises(ValidationError) as exc:
            _product(wholesale_price=-5.0)
        assert "wholesale_price" in exc.value.messages

    def test_seller_cannot_list_negative_stock(self):
        with pytest.raises(ValidationError) as exc:
            _product(stock_quantity=-1)
        assert "stock_quantity" in exc.value.messages


class TestUpdateListing:
    def test_partial_update(self):
        product = _product()
        product.update_listing(price=150.0, is_active=False)
        assert product.price == 150.0
        assert product.is_active is False
        assert product.name == "Spring Water"
        assert isinstance(product._events[-1], ProductUpdated)

    def test_update_rejects_negative_stock(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.update_listing(stock_quantity=-3)


class TestDecrementFromSnapshot:
    def test_uses_snapshot_not_current_stock(self):
        product = _product(stock_quantity=3)
        product.decrement_from_snapshot(snapshot_stock=10, quantity=2)
        assert product.stock_quantity == 8

        event = product._events[-1]
        assert isinstance(event, StockDecremented)
        assert event.snapshot_stock == 10
        assert event.new_stock == 8

    def test_rejects_taking_more_than_snapshot(self):
        product = _product(stock_quantity=1)
        with pytest.raises(ValidationError) as exc:
            product.decrement_from_snapshot(snapshot_stock=1, quantity=4)

        assert "stock_quantity" in exc.value.messages
        assert product.stock_quantity == 1
        assert product._events == []

    def test_may_take_the_last_unit(self):
        product = _product(stock_quantity=2)
        product.decrement_from_snapshot(snapshot_stock=2, quantity=2)
        assert product.stock_quantity == 0


class TestStockInvariant:
    def test_negative_stock_is_rejected(self):
        product = _product()
        with pytest.raises(ValidationError) as exc:
            product.stock_quantity = -1
        assert "stock_quantity" in exc.value.messages
