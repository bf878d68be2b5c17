"""Marketplace bounded context: products, carts, orders and checkout.

Sellers list bottled water products; buyers collect them in a cart and check
out. Checkout splits the cart into one order per seller.
"""

from protean.domain import Domain

from marketplace.utils.logging import get_logger

marketplace = Domain(name="marketplace")

logger = get_logger(__name__)
