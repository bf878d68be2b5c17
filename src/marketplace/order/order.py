"""Order aggregate: what one buyer bought from one seller in a checkout.

A checkout spanning several sellers produces several orders. Line prices are
copied from the cart's product snapshot and never change afterwards.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    COD = "cod"
    ONLINE = "online"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def money(amount) -> float:
    return round(float(amount), 2)


def initial_payment_status(payment_method) -> str:
    """Cash on delivery is collected later; online payments are taken at checkout."""
    if PaymentMethod(payment_method) == PaymentMethod.COD:
        return PaymentStatus.PENDING.value
    return PaymentStatus.PAID.value


@marketplace.value_object(part_of="Order")
class Address:
    """Where an order goes, as typed into the checkout form."""

    full_name = String(required=True, max_length=255)
    phone = String(required=True, max_length=20)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=10)


@marketplace.entity(part_of="Order", limit=None)
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_per_unit = Float(required=True, min_value=0.01)
    total_price = Float(required=True)

    @invariant.post
    def total_price_matches_unit_price(self):
        if abs(self.total_price - money(self.price_per_unit * self.quantity)) > 0.005:
            raise ValidationError({"total_price": ["Line total must equal price per unit times quantity"]})


@marketplace.aggregate(limit=None)
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = ValueObject(Address, required=True)
    billing_address = ValueObject(Address, required=True)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_method = String(choices=PaymentMethod, required=True)
    notes = Text()
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_matches_line_items(self):
        expected = money(sum(item.total_price for item in self.items))
        if abs(self.total_amount - expected) > 0.005:
            raise ValidationError({"total_amount": ["Order total must equal the sum of its line totals"]})

    @classmethod
    def place(cls, order_number, buyer_id, seller_id, lines, shipping_address, payment_method, notes=None):
        """Create a pending order for one seller.

        ``lines`` is an iterable of (product_id, quantity, price_per_unit).
        Billing is always the shipping address.
        """
        lines = list(lines)
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = [
            OrderItem(
                product_id=product_id,
                quantity=quantity,
                price_per_unit=price_per_unit,
                total_price=money(price_per_unit * quantity),
            )
            for product_id, quantity, price_per_unit in lines
        ]
        total = money(sum(item.total_price for item in items))
        payment_status = initial_payment_status(payment_method)
        now = datetime.now(UTC)

        order = cls(
            order_number=order_number,
            buyer_id=buyer_id,
            seller_id=seller_id,
            total_amount=total,
            status=OrderStatus.PENDING.value,
            shipping_address=shipping_address,
            billing_address=shipping_address,
            payment_status=payment_status,
            payment_method=payment_method,
            notes=notes,
            items=items,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                buyer_id=str(buyer_id),
                seller_id=str(seller_id),
                total_amount=total,
                item_count=len(items),
                payment_method=payment_method,
                payment_status=payment_status,
                placed_at=now,
            )
        )
        return order

    def change_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot move an order from {current.value} to {target.value}"]})

        self.status = target.value
        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                buyer_id=str(self.buyer_id),
                seller_id=str(self.seller_id),
                previous_status=current.value,
                new_status=target.value,
                total_amount=self.total_amount,
                changed_at=self.updated_at,
            )
        )
