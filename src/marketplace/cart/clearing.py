"""Clear a buyer's cart, the last step of checkout."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.cart.cart import Cart
from marketplace.domain import marketplace


@marketplace.command(part_of="Cart")
class ClearCart:
    buyer_id = Identifier(required=True)


@marketplace.command_handler(part_of=Cart)
class ClearCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_buyer(command.buyer_id)
        if cart is None:
            return 0

        removed = len(cart.items)
        cart.clear()
        repo.add(cart)
        return removed
