"""Application tests for seller product management and the stock step."""

import pytest
from marketplace.product.listing import DeleteProduct, UpdateProduct
from marketplace.product.product import Product
from marketplace.product.stock import DecrementStock
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.session import NotAuthorized


class TestListProduct:
    def test_list_product(self, list_product):
        product_id = list_product(name="Alkaline Water", price=249.0, stock_quantity=40)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Alkaline Water"
        assert product.stock_quantity == 40
        assert product.is_active is True

    def test_storefront_shows_active_products_newest_first(self, list_product):
        first = list_product(name="First")
        second = list_product(name="Second")
        hidden = list_product(name="Hidden", is_active=False)

        active = current_domain.repository_for(Product).active_products()
        ids = [str(p.id) for p in active]
        assert ids == [second, first]
        assert hidden not in ids

    def test_seller_view_includes_inactive(self, list_product):
        list_product(seller_id="seller-001", name="Visible")
        list_product(seller_id="seller-001", name="Hidden", is_active=False)
        list_product(seller_id="seller-002", name="Someone else")

        mine = current_domain.repository_for(Product).for_seller("seller-001")
        assert sorted(p.name for p in mine) == ["Hidden", "Visible"]


class TestUpdateAndDelete:
    def test_owner_updates_listing(self, list_product):
        product_id = list_product()
        current_domain.process(
            UpdateProduct(product_id=product_id, seller_id="seller-001", price=180.0, stock_quantity=5),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 180.0
        assert product.stock_quantity == 5

    def test_other_seller_cannot_update(self, list_product):
        product_id = list_product(seller_id="seller-001")
        with pytest.raises(NotAuthorized):
            current_domain.process(
                UpdateProduct(product_id=product_id, seller_id="seller-002", price=1.0),
                asynchronous=False,
            )

    def test_owner_deletes_listing(self, list_product):
        product_id = list_product()
        current_domain.process(DeleteProduct(product_id=product_id, seller_id="seller-001"), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

    def test_other_seller_cannot_delete(self, list_product):
        product_id = list_product(seller_id="seller-001")
        with pytest.raises(NotAuthorized):
            current_domain.process(DeleteProduct(product_id=product_id, seller_id="seller-002"), asynchronous=False)


class TestDecrementStock:
    def test_stock_is_snapshot_minus_quantity(self, list_product):
        product_id = list_product(stock_quantity=10)
        new_stock = current_domain.process(
            DecrementStock(product_id=product_id, snapshot_stock=10, quantity=3),
            asynchronous=False,
        )
        assert new_stock == 7
        assert current_domain.repository_for(Product).get(product_id).stock_quantity == 7

    def test_stale_snapshot_overwrites_newer_stock(self, list_product):
        product_id = list_product(stock_quantity=10)
        # Another checkout already took stock down to 4
        current_domain.process(DecrementStock(product_id=product_id, snapshot_stock=10, quantity=6), asynchronous=False)

        current_domain.process(DecrementStock(product_id=product_id, snapshot_stock=10, quantity=1), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).stock_quantity == 9

    def test_overselling_is_rejected(self, list_product):
        product_id = list_product(stock_quantity=1)
        with pytest.raises(ValidationError):
            current_domain.process(DecrementStock(product_id=product_id, snapshot_stock=1, quantity=3), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).stock_quantity == 1


class TestLargeCatalog:
    def test_listings_are_not_truncated(self, list_product):
        for n in range(105):
            list_product(seller_id="seller-001", name=f"Bottle {n}")
        list_product(seller_id="seller-002", name="Someone else")

        repo = current_domain.repository_for(Product)
        assert len(repo.for_seller("seller-001")) == 105
        assert len(repo.active_products()) == 106
