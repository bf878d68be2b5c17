"""Cart lines joined with the catalog, as shown in the cart and fed to checkout.

A ProductSnapshot is read once when the lines are loaded. It is not refreshed
before checkout, so price and stock may be stale by the time an order is placed.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.cart.cart import Cart
from marketplace.domain import logger
from marketplace.product.product import Product


@dataclass(frozen=True)
class ProductSnapshot:
    price: float
    seller_id: str
    stock_quantity: int
    name: str


@dataclass(frozen=True)
class CartLine:
    item_id: str
    buyer_id: str
    product_id: str
    quantity: int
    product: ProductSnapshot

    @property
    def seller_id(self) -> str:
        return self.product.seller_id

    @property
    def line_total(self) -> float:
        return round(self.product.price * self.quantity, 2)


def load_cart_lines(buyer_id) -> list[CartLine]:
    """The buyer's cart lines in the order they were added.

    Lines whose product has since been deleted are skipped.
    """
    cart = current_domain.repository_for(Cart).for_buyer(buyer_id)
    if cart is None:
        return []

    product_repo = current_domain.repository_for(Product)
    lines = []
    for item in sorted(cart.items, key=lambda i: i.added_at):
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            logger.warning("cart_product_missing", buyer_id=str(buyer_id), product_id=str(item.product_id))
            continue

        lines.append(
            CartLine(
                item_id=str(item.id),
                buyer_id=str(buyer_id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                product=ProductSnapshot(
                    price=product.price,
                    seller_id=str(product.seller_id),
                    stock_quantity=product.stock_quantity,
                    name=product.name,
                ),
            )
        )
    return lines


def cart_count(buyer_id) -> int:
    """Total units in the cart, for the header badge."""
    cart = current_domain.repository_for(Cart).for_buyer(buyer_id)
    return cart.item_count if cart else 0
