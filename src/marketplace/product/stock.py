"""Checkout stock step: write a snapshot-based stock level for one product."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.product.product import Product


@marketplace.command(part_of="Product")
class DecrementStock:
    product_id = Identifier(required=True)
    snapshot_stock = Integer(required=True)
    quantity = Integer(required=True, min_value=1)


@marketplace.command_handler(part_of=Product)
class DecrementStockHandler:
    @handle(DecrementStock)
    def decrement_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.decrement_from_snapshot(command.snapshot_stock, command.quantity)
        repo.add(product)
        return product.stock_quantity
