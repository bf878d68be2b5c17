"""Place the order for one seller's group of cart lines: command and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import logger, marketplace
from marketplace.order.order import Address, Order, PaymentMethod


@marketplace.command(part_of="Order")
class PlaceSellerOrder:
    order_number = String(required=True, max_length=50)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, price_per_unit}
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(choices=PaymentMethod, required=True)
    notes = Text()


@marketplace.command_handler(part_of=Order)
class PlaceSellerOrderHandler:
    @handle(PlaceSellerOrder)
    def place_seller_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        address_data = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )

        order = Order.place(
            order_number=command.order_number,
            buyer_id=command.buyer_id,
            seller_id=command.seller_id,
            lines=[(i["product_id"], i["quantity"], i["price_per_unit"]) for i in items_data],
            shipping_address=Address(**address_data),
            payment_method=command.payment_method,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            seller_id=str(order.seller_id),
            total_amount=order.total_amount,
        )
        return str(order.id)
