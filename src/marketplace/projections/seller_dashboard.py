"""Seller dashboard: running order counts and revenue per seller.

Revenue counts every order that has not been cancelled, paid or not.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced, OrderStatusChanged
from marketplace.order.order import Order, OrderStatus
from marketplace.product.product import Product


@marketplace.projection(limit=None)
class SellerDashboardStats:
    seller_id = Identifier(identifier=True, required=True)
    total_orders = Integer(default=0)
    pending_orders = Integer(default=0)
    revenue = Float(default=0.0)


def _get_or_create(seller_id):
    repo = current_domain.repository_for(SellerDashboardStats)
    try:
        return repo.get(seller_id)
    except ObjectNotFoundError:
        return SellerDashboardStats(seller_id=seller_id, total_orders=0, pending_orders=0, revenue=0.0)


@marketplace.projector(projector_for=SellerDashboardStats, aggregates=[Order])
class SellerDashboardStatsProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        stats = _get_or_create(event.seller_id)
        stats.total_orders = (stats.total_orders or 0) + 1
        stats.pending_orders = (stats.pending_orders or 0) + 1
        stats.revenue = round((stats.revenue or 0.0) + event.total_amount, 2)
        current_domain.repository_for(SellerDashboardStats).add(stats)

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        stats = _get_or_create(event.seller_id)
        if event.previous_status == OrderStatus.PENDING.value:
            stats.pending_orders = max((stats.pending_orders or 0) - 1, 0)
        if event.new_status == OrderStatus.CANCELLED.value:
            stats.revenue = round(max((stats.revenue or 0.0) - event.total_amount, 0.0), 2)
        current_domain.repository_for(SellerDashboardStats).add(stats)


def dashboard_for(seller_id) -> dict:
    """Stats for the seller dashboard, with the live product count alongside."""
    stats = _get_or_create(str(seller_id))
    return {
        "seller_id": str(seller_id),
        "product_count": len(current_domain.repository_for(Product).for_seller(seller_id)),
        "total_orders": stats.total_orders or 0,
        "pending_orders": stats.pending_orders or 0,
        "revenue": stats.revenue or 0.0,
    }
