"""Catalog reads for the storefront and the seller's own listing view."""

from marketplace.domain import marketplace
from marketplace.product.product import Product


def _newest_first(products):
    return sorted(products, key=lambda p: p.created_at, reverse=True)


@marketplace.repository(part_of=Product)
class ProductRepository:
    def active_products(self) -> list[Product]:
        """Everything buyers can see, newest listings first."""
        return _newest_first(self._dao.query.filter(is_active=True).all().items)

    def for_seller(self, seller_id) -> list[Product]:
        """A seller's listings, including inactive ones."""
        return _newest_first(self._dao.query.filter(seller_id=str(seller_id)).all().items)
