"""Checkout: turn a buyer's cart lines into one order per seller.

For each seller group, in order: insert the order with its line items, then
write each product's stock as ``snapshot - quantity``. After every group
succeeds the buyer's whole cart is cleared. Each step is processed and
committed on its own. A failing step stops the run; orders placed before it
are kept and the cart is left as it was.
"""

import json
import secrets
import string
import time
from dataclasses import asdict, dataclass, field

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.cart.clearing import ClearCart
from marketplace.cart.lines import CartLine
from marketplace.checkout.grouping import group_by_seller, group_total
from marketplace.domain import logger
from marketplace.order.order import PaymentMethod
from marketplace.order.placement import PlaceSellerOrder
from marketplace.product.stock import DecrementStock
from shared.session import NotAuthorized, Role, Session

ORDER_NUMBER_PREFIX = "ORD"
ORDER_SUFFIX_LENGTH = 9
_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase

CHECKOUT_FAILED_MESSAGE = "Failed to place order. Please try again."


class CheckoutFailed(Exception):
    """Raised for any failure once checkout has started writing."""

    def __init__(self, message: str = CHECKOUT_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class ShippingDetails:
    full_name: str
    phone: str
    address: str
    city: str
    state: str
    pincode: str


@dataclass(frozen=True)
class PlacedOrder:
    order_id: str
    order_number: str
    seller_id: str
    total_amount: float


@dataclass(frozen=True)
class CheckoutResult:
    orders: list[PlacedOrder] = field(default_factory=list)

    @property
    def order_ids(self) -> list[str]:
        return [order.order_id for order in self.orders]


def generate_order_number() -> str:
    """``ORD-<epoch millis>-<9 base-36 chars>``; uniqueness is left to the store."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(ORDER_SUFFIX_LENGTH))
    return f"{ORDER_NUMBER_PREFIX}-{millis}-{suffix}"


class CheckoutOrchestrator:
    def __init__(self, order_number_factory=generate_order_number):
        self.order_number_factory = order_number_factory

    def checkout(
        self,
        session: Session,
        lines: list[CartLine],
        shipping: ShippingDetails,
        payment_method: str,
        notes: str | None = None,
    ) -> CheckoutResult:
        self._check_request(session, lines, payment_method)

        log = logger.bind(buyer_id=session.user_id, payment_method=payment_method)
        groups = group_by_seller(lines)
        log.info("checkout_started", line_count=len(lines), seller_count=len(groups))

        placed = []
        for seller_id, group in groups.items():
            order_number = self.order_number_factory()
            order_id = self._run_step(
                log,
                "place_order",
                PlaceSellerOrder(
                    order_number=order_number,
                    buyer_id=session.user_id,
                    seller_id=seller_id,
                    items=json.dumps(
                        [
                            {
                                "product_id": line.product_id,
                                "quantity": line.quantity,
                                "price_per_unit": line.product.price,
                            }
                            for line in group
                        ]
                    ),
                    shipping_address=json.dumps(asdict(shipping)),
                    payment_method=payment_method,
                    notes=notes,
                ),
                seller_id=seller_id,
                order_number=order_number,
            )

            for line in group:
                self._run_step(
                    log,
                    "decrement_stock",
                    DecrementStock(
                        product_id=line.product_id,
                        snapshot_stock=line.product.stock_quantity,
                        quantity=line.quantity,
                    ),
                    seller_id=seller_id,
                    product_id=line.product_id,
                )

            placed.append(
                PlacedOrder(
                    order_id=str(order_id),
                    order_number=order_number,
                    seller_id=seller_id,
                    total_amount=group_total(group),
                )
            )

        self._run_step(log, "clear_cart", ClearCart(buyer_id=session.user_id))

        log.info("checkout_completed", order_numbers=[o.order_number for o in placed])
        return CheckoutResult(orders=placed)

    def _check_request(self, session, lines, payment_method):
        session.require_role(Role.BUYER)

        if not lines:
            raise ValidationError({"lines": ["Your cart is empty"]})
        if payment_method not in {method.value for method in PaymentMethod}:
            raise ValidationError({"payment_method": [f"Unsupported payment method: {payment_method}"]})
        if any(str(line.buyer_id) != str(session.user_id) for line in lines):
            raise NotAuthorized("Cart lines belong to another buyer")

    def _run_step(self, log, step, command, **context):
        try:
            return current_domain.process(command, asynchronous=False)
        except Exception as exc:
            log.error("checkout_step_failed", step=step, error=str(exc), exc_info=True, **context)
            raise CheckoutFailed() from exc
