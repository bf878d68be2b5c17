"""FastAPI routes for the Marketplace domain.

Thin adapters: resolve the session, translate the request into a command
(or a read), and shape the response.
"""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.sessions import resolve_session
from marketplace.api.schemas import (
    AddToCartRequest,
    CartCountResponse,
    CartItemIdResponse,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    ListProductRequest,
    OrderItemResponse,
    OrderResponse,
    OrderSummaryResponse,
    PlacedOrderSchema,
    ProductIdResponse,
    ProductResponse,
    SellerDashboardResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from marketplace.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from marketplace.cart.lines import cart_count, load_cart_lines
from marketplace.checkout.orchestrator import CheckoutOrchestrator, ShippingDetails
from marketplace.order.queries import get_order, orders_for
from marketplace.order.status import UpdateOrderStatus
from marketplace.product.listing import DeleteProduct, ListProduct, UpdateProduct
from marketplace.product.product import Product
from marketplace.projections.order_summary import summaries_for
from marketplace.projections.seller_dashboard import dashboard_for
from shared.session import Role, Session


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        seller_id=str(product.seller_id),
        name=product.name,
        description=product.description,
        size_ml=product.size_ml,
        price=product.price,
        wholesale_price=product.wholesale_price,
        stock_quantity=product.stock_quantity,
        images=product.image_urls,
        certifications=product.certification_map,
        batch_info=product.batch_info,
        is_active=bool(product.is_active),
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        order_number=order.order_number,
        buyer_id=str(order.buyer_id),
        seller_id=str(order.seller_id),
        total_amount=order.total_amount,
        status=order.status,
        payment_status=order.payment_status,
        payment_method=order.payment_method,
        shipping_address=order.shipping_address.to_dict(),
        billing_address=order.billing_address.to_dict(),
        notes=order.notes,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                price_per_unit=item.price_per_unit,
                total_price=item.total_price,
            )
            for item in order.items
        ],
        created_at=order.created_at,
    )


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def browse_products() -> list[ProductResponse]:
    """Public storefront: every active product, newest first."""
    return [_product_response(p) for p in current_domain.repository_for(Product).active_products()]


@product_router.get("/mine", response_model=list[ProductResponse])
async def my_products(session: Session = Depends(resolve_session)) -> list[ProductResponse]:
    session.require_role(Role.SELLER)
    return [_product_response(p) for p in current_domain.repository_for(Product).for_seller(session.user_id)]


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def list_product(body: ListProductRequest, session: Session = Depends(resolve_session)) -> ProductIdResponse:
    session.require_role(Role.SELLER)
    command = ListProduct(
        seller_id=session.user_id,
        name=body.name,
        description=body.description,
        size_ml=body.size_ml,
        price=body.price,
        wholesale_price=body.wholesale_price,
        stock_quantity=body.stock_quantity,
        images=json.dumps(body.images),
        certifications=json.dumps(body.certifications),
        batch_info=body.batch_info,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    session: Session = Depends(resolve_session),
) -> StatusResponse:
    session.require_role(Role.SELLER)
    changes = body.model_dump(exclude_none=True)
    for json_field in ("images", "certifications"):
        if json_field in changes:
            changes[json_field] = json.dumps(changes[json_field])

    command = UpdateProduct(product_id=product_id, seller_id=session.user_id, **changes)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, session: Session = Depends(resolve_session)) -> StatusResponse:
    session.require_role(Role.SELLER)
    command = DeleteProduct(product_id=product_id, seller_id=session.user_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(session: Session = Depends(resolve_session)) -> CartResponse:
    session.require_role(Role.BUYER)
    lines = load_cart_lines(session.user_id)
    return CartResponse(
        items=[
            CartLineResponse(
                item_id=line.item_id,
                product_id=line.product_id,
                name=line.product.name,
                seller_id=line.seller_id,
                price=line.product.price,
                stock_quantity=line.product.stock_quantity,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in lines
        ],
        total=round(sum(line.line_total for line in lines), 2),
    )


@cart_router.get("/count", response_model=CartCountResponse)
async def view_cart_count(session: Session = Depends(resolve_session)) -> CartCountResponse:
    return CartCountResponse(count=cart_count(session.user_id) if session.is_buyer else 0)


@cart_router.post("/items", status_code=201, response_model=CartItemIdResponse)
async def add_cart_item(body: AddToCartRequest, session: Session = Depends(resolve_session)) -> CartItemIdResponse:
    session.require_role(Role.BUYER)
    command = AddToCart(buyer_id=session.user_id, product_id=body.product_id, quantity=body.quantity)
    result = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=result)


@cart_router.put("/items/{item_id}", response_model=StatusResponse)
async def update_cart_item(
    item_id: str,
    body: UpdateCartQuantityRequest,
    session: Session = Depends(resolve_session),
) -> StatusResponse:
    session.require_role(Role.BUYER)
    command = UpdateCartQuantity(buyer_id=session.user_id, item_id=item_id, new_quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str, session: Session = Depends(resolve_session)) -> StatusResponse:
    session.require_role(Role.BUYER)
    command = RemoveFromCart(buyer_id=session.user_id, item_id=item_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest, session: Session = Depends(resolve_session)) -> CheckoutResponse:
    lines = load_cart_lines(session.user_id)
    if body.item_ids is not None:
        selected = set(body.item_ids)
        lines = [line for line in lines if line.item_id in selected]

    result = CheckoutOrchestrator().checkout(
        session=session,
        lines=lines,
        shipping=ShippingDetails(**body.shipping.model_dump()),
        payment_method=body.payment_method,
        notes=body.notes,
    )
    return CheckoutResponse(
        orders=[
            PlacedOrderSchema(
                order_id=o.order_id,
                order_number=o.order_number,
                seller_id=o.seller_id,
                total_amount=o.total_amount,
            )
            for o in result.orders
        ]
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(session: Session = Depends(resolve_session)) -> list[OrderResponse]:
    return [_order_response(order) for order in orders_for(session)]


@order_router.get("/summary", response_model=list[OrderSummaryResponse])
async def list_order_summaries(session: Session = Depends(resolve_session)) -> list[OrderSummaryResponse]:
    rows = summaries_for(session.user_id, as_seller=session.is_seller)
    return [
        OrderSummaryResponse(
            order_id=str(row.order_id),
            order_number=row.order_number,
            buyer_id=str(row.buyer_id),
            seller_id=str(row.seller_id),
            total_amount=row.total_amount,
            status=row.status,
            payment_status=row.payment_status,
            item_count=row.item_count or 0,
            created_at=row.created_at,
        )
        for row in rows
    ]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def view_order(order_id: str, session: Session = Depends(resolve_session)) -> OrderResponse:
    return _order_response(get_order(order_id, session))


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    session: Session = Depends(resolve_session),
) -> StatusResponse:
    session.require_role(Role.SELLER)
    command = UpdateOrderStatus(order_id=order_id, seller_id=session.user_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get("/seller", response_model=SellerDashboardResponse)
async def seller_dashboard(session: Session = Depends(resolve_session)) -> SellerDashboardResponse:
    session.require_role(Role.SELLER)
    return SellerDashboardResponse(**dashboard_for(session.user_id))
