"""Product aggregate: a bottled water listing owned by one seller."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import logger, marketplace

BOTTLE_SIZES_ML = (500, 750)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@marketplace.aggregate(limit=None)
class Product:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    size_ml = Integer(required=True)
    price = Float(required=True, min_value=0.01)
    wholesale_price = Float()
    stock_quantity = Integer(default=0)
    images = Text()  # JSON array of image URLs
    certifications = Text()  # JSON object, e.g. {"bis": "IS 14543"}
    batch_info = String(max_length=255)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def size_must_be_a_supported_bottle(self):
        if self.size_ml not in BOTTLE_SIZES_ML:
            raise ValidationError({"size_ml": [f"Bottle size must be one of {', '.join(map(str, BOTTLE_SIZES_ML))} ml"]})

    @invariant.post
    def stock_cannot_go_negative(self):
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})

    @invariant.post
    def wholesale_price_must_be_positive(self):
        if self.wholesale_price is not None and self.wholesale_price <= 0:
            raise ValidationError({"wholesale_price": ["Wholesale price must be greater than zero"]})

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def certification_map(self) -> dict:
        return json.loads(self.certifications) if self.certifications else {}

    @classmethod
    def list_for_sale(
        cls,
        seller_id,
        name,
        size_ml,
        price,
        stock_quantity=0,
        description=None,
        wholesale_price=None,
        images=None,
        certifications=None,
        batch_info=None,
        is_active=True,
    ):
        from marketplace.product.events import ProductListed

        _validate_seller_stock(stock_quantity)

        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            name=name,
            description=description,
            size_ml=size_ml,
            price=price,
            wholesale_price=wholesale_price,
            stock_quantity=stock_quantity,
            images=_as_json(images),
            certifications=_as_json(certifications),
            batch_info=batch_info,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=product.id,
                seller_id=seller_id,
                name=name,
                size_ml=size_ml,
                price=price,
                stock_quantity=stock_quantity,
                listed_at=now,
            )
        )
        return product

    def update_listing(
        self,
        name=_UNSET,
        description=_UNSET,
        size_ml=_UNSET,
        price=_UNSET,
        wholesale_price=_UNSET,
        stock_quantity=_UNSET,
        images=_UNSET,
        certifications=_UNSET,
        batch_info=_UNSET,
        is_active=_UNSET,
    ):
        from marketplace.product.events import ProductUpdated

        if stock_quantity is not _UNSET:
            _validate_seller_stock(stock_quantity)
        if images is not _UNSET:
            images = _as_json(images)
        if certifications is not _UNSET:
            certifications = _as_json(certifications)

        changes = {
            "name": name,
            "description": description,
            "size_ml": size_ml,
            "price": price,
            "wholesale_price": wholesale_price,
            "stock_quantity": stock_quantity,
            "images": images,
            "certifications": certifications,
            "batch_info": batch_info,
            "is_active": is_active,
        }
        for field_name, value in changes.items():
            if value is not _UNSET:
                setattr(self, field_name, value)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=self.id,
                seller_id=self.seller_id,
                name=self.name,
                price=self.price,
                stock_quantity=self.stock_quantity,
                is_active=self.is_active,
                updated_at=self.updated_at,
            )
        )

    def decrement_from_snapshot(self, snapshot_stock, quantity):
        """Write ``snapshot_stock - quantity`` as the new stock level.

        The snapshot is whatever the buyer's cart read earlier; the current
        stored value is ignored, so concurrent checkouts can lose updates.
        A result below zero is rejected and the stored stock is left alone.
        """
        from marketplace.product.events import StockDecremented

        new_stock = snapshot_stock - quantity
        if new_stock < 0:
            logger.warning(
                "stock_oversold",
                product_id=str(self.id),
                snapshot_stock=snapshot_stock,
                quantity=quantity,
                new_stock=new_stock,
            )
            raise ValidationError({"stock_quantity": [f"Only {snapshot_stock} left, cannot take {quantity}"]})

        self.stock_quantity = new_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockDecremented(
                product_id=self.id,
                seller_id=self.seller_id,
                snapshot_stock=snapshot_stock,
                quantity=quantity,
                new_stock=new_stock,
            )
        )


def _validate_seller_stock(stock_quantity):
    if stock_quantity is None or stock_quantity < 0:
        raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})


def _as_json(value):
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)
