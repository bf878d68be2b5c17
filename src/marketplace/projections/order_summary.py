"""Order summary: one row per order for buyer and seller dashboard lists."""

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced, OrderStatusChanged
from marketplace.order.order import Order


@marketplace.projection(limit=None)
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    order_number = String(required=True, max_length=50)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    total_amount = Float(required=True)
    status = String(required=True)
    payment_status = String(required=True)
    item_count = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()


@marketplace.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                order_number=event.order_number,
                buyer_id=event.buyer_id,
                seller_id=event.seller_id,
                total_amount=event.total_amount,
                status="pending",
                payment_status=event.payment_status,
                item_count=event.item_count,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = event.new_status
        summary.updated_at = event.changed_at
        repo.add(summary)


def summaries_for(user_id, as_seller=False) -> list[OrderSummary]:
    """Dashboard rows for a buyer (or a seller), newest first."""
    key = "seller_id" if as_seller else "buyer_id"
    rows = current_domain.repository_for(OrderSummary)._dao.query.filter(**{key: str(user_id)}).all().items
    return sorted(rows, key=lambda r: r.created_at, reverse=True)
