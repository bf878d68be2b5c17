"""Order reads for buyer and seller dashboards."""

from marketplace.domain import marketplace
from marketplace.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    def _newest_first(self, **filters) -> list[Order]:
        found = self._dao.query.filter(**filters).all().items
        # Reload through the repository so line items come along
        orders = [self.get(order.id) for order in found]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def for_buyer(self, buyer_id) -> list[Order]:
        return self._newest_first(buyer_id=str(buyer_id))

    def for_seller(self, seller_id) -> list[Order]:
        return self._newest_first(seller_id=str(seller_id))
