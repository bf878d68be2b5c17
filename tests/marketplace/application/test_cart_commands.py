"""Application tests for cart commands and cart reads."""

import pytest
from marketplace.cart.cart import Cart
from marketplace.cart.clearing import ClearCart
from marketplace.cart.items import RemoveFromCart, UpdateCartQuantity
from marketplace.cart.lines import cart_count, load_cart_lines
from marketplace.product.listing import UpdateProduct
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


class TestAddToCart:
    def test_first_add_opens_cart(self, list_product, add_to_cart):
        product_id = list_product()
        add_to_cart(product_id, quantity=2)

        cart = current_domain.repository_for(Cart).for_buyer("buyer-001")
        assert cart is not None
        assert cart.items[0].quantity == 2

    def test_one_cart_per_buyer(self, list_product, add_to_cart):
        add_to_cart(list_product(name="A"))
        add_to_cart(list_product(name="B"))

        carts = current_domain.repository_for(Cart)._dao.query.filter(buyer_id="buyer-001").all().items
        assert len(carts) == 1

    def test_add_same_product_twice_increments(self, list_product, add_to_cart):
        product_id = list_product()
        first = add_to_cart(product_id)
        second = add_to_cart(product_id)
        assert first == second
        assert cart_count("buyer-001") == 2

    def test_unknown_product(self, add_to_cart):
        with pytest.raises(ObjectNotFoundError):
            add_to_cart("no-such-product")

    def test_inactive_product(self, list_product, add_to_cart):
        product_id = list_product(is_active=False)
        with pytest.raises(ValidationError) as exc:
            add_to_cart(product_id)
        assert "product_id" in exc.value.messages


class TestChangeCart:
    def test_update_quantity(self, list_product, add_to_cart):
        item_id = add_to_cart(list_product())
        current_domain.process(
            UpdateCartQuantity(buyer_id="buyer-001", item_id=item_id, new_quantity=5),
            asynchronous=False,
        )
        assert cart_count("buyer-001") == 5

    def test_remove_item(self, list_product, add_to_cart):
        item_id = add_to_cart(list_product())
        current_domain.process(RemoveFromCart(buyer_id="buyer-001", item_id=item_id), asynchronous=False)
        assert cart_count("buyer-001") == 0

    def test_remove_without_cart(self):
        with pytest.raises(ValidationError):
            current_domain.process(RemoveFromCart(buyer_id="buyer-404", item_id="x"), asynchronous=False)

    def test_clear_cart(self, list_product, add_to_cart):
        add_to_cart(list_product(name="A"), quantity=2)
        add_to_cart(list_product(name="B"))
        removed = current_domain.process(ClearCart(buyer_id="buyer-001"), asynchronous=False)
        assert removed == 2
        assert load_cart_lines("buyer-001") == []

    def test_clear_without_cart_is_a_no_op(self):
        assert current_domain.process(ClearCart(buyer_id="buyer-404"), asynchronous=False) == 0


class TestCartLines:
    def test_lines_carry_product_snapshot(self, list_product, add_to_cart):
        product_id = list_product(seller_id="seller-009", name="Glacier", price=299.0, stock_quantity=5)
        item_id = add_to_cart(product_id, quantity=2)

        [line] = load_cart_lines("buyer-001")
        assert line.item_id == item_id
        assert line.buyer_id == "buyer-001"
        assert line.quantity == 2
        assert line.seller_id == "seller-009"
        assert line.product.price == 299.0
        assert line.product.stock_quantity == 5
        assert line.product.name == "Glacier"
        assert line.line_total == 598.0

    def test_snapshot_does_not_follow_later_changes(self, list_product, add_to_cart):
        product_id = list_product(price=100.0, stock_quantity=10)
        add_to_cart(product_id)
        [line] = load_cart_lines("buyer-001")

        current_domain.process(
            UpdateProduct(product_id=product_id, seller_id="seller-001", price=150.0, stock_quantity=2),
            asynchronous=False,
        )
        assert line.product.price == 100.0
        assert line.product.stock_quantity == 10

    def test_empty_cart(self):
        assert load_cart_lines("buyer-404") == []
        assert cart_count("buyer-404") == 0
