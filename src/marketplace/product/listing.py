"""Seller-side product management: list, edit and delete listings."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import logger, marketplace
from marketplace.product.product import Product
from shared.session import NotAuthorized

_EDITABLE_FIELDS = (
    "name",
    "description",
    "size_ml",
    "price",
    "wholesale_price",
    "stock_quantity",
    "images",
    "certifications",
    "batch_info",
    "is_active",
)


@marketplace.command(part_of="Product")
class ListProduct:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    size_ml = Integer(required=True)
    price = Float(required=True)
    wholesale_price = Float()
    stock_quantity = Integer(default=0)
    images = Text()  # JSON array of image URLs
    certifications = Text()  # JSON object
    batch_info = String(max_length=255)
    is_active = Boolean(default=True)


@marketplace.command(part_of="Product")
class UpdateProduct:
    """Partial edit; fields left out of the command are not touched."""

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    size_ml = Integer()
    price = Float()
    wholesale_price = Float()
    stock_quantity = Integer()
    images = Text()
    certifications = Text()
    batch_info = String(max_length=255)
    is_active = Boolean()


@marketplace.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)


def _owned_product(repo, product_id, seller_id):
    product = repo.get(product_id)
    if str(product.seller_id) != str(seller_id):
        raise NotAuthorized("Only the listing's seller can change it")
    return product


@marketplace.command_handler(part_of=Product)
class ProductListingHandler:
    @handle(ListProduct)
    def list_product(self, command):
        product = Product.list_for_sale(
            seller_id=command.seller_id,
            name=command.name,
            description=command.description,
            size_ml=command.size_ml,
            price=command.price,
            wholesale_price=command.wholesale_price,
            stock_quantity=command.stock_quantity,
            images=command.images,
            certifications=command.certifications,
            batch_info=command.batch_info,
            is_active=command.is_active,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_listed", product_id=str(product.id), seller_id=str(command.seller_id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)

        changes = {}
        for field_name in _EDITABLE_FIELDS:
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = value

        product.update_listing(**changes)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)
        repo._dao.delete(product)

        logger.info("product_deleted", product_id=str(command.product_id), seller_id=str(command.seller_id))
