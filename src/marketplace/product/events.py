"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductListed:
    """A seller put a new product on the storefront."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(required=True)
    size_ml = Integer(required=True)
    price = Float(required=True)
    stock_quantity = Integer(required=True)
    listed_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductUpdated:
    """A seller edited a listing (price, stock, visibility or details)."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock_quantity = Integer()
    is_active = Boolean()
    updated_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class StockDecremented:
    """Checkout wrote a snapshot-based stock level for a purchased product."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    snapshot_stock = Integer(required=True)
    quantity = Integer(required=True)
    new_stock = Integer(required=True)
