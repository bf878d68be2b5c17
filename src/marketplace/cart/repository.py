"""Cart lookup by buyer."""

from marketplace.cart.cart import Cart
from marketplace.domain import marketplace


@marketplace.repository(part_of=Cart)
class CartRepository:
    def for_buyer(self, buyer_id) -> Cart | None:
        """The buyer's cart with its items loaded, or None if they never added anything."""
        carts = self._dao.query.filter(buyer_id=str(buyer_id)).all().items
        if not carts:
            return None
        return self.get(carts[0].id)

    def open_for_buyer(self, buyer_id) -> Cart:
        return self.for_buyer(buyer_id) or Cart.open(buyer_id)
