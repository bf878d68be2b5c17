"""Pydantic request/response schemas for the Marketplace API.

These are external contracts, kept separate from the internal Protean
commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class ListProductRequest(BaseModel):
    name: str = Field(..., max_length=255)
    description: str | None = None
    size_ml: int
    price: float = Field(gt=0)
    wholesale_price: float | None = Field(None, gt=0)
    stock_quantity: int = Field(0, ge=0)
    images: list[str] = Field(default_factory=list)
    certifications: dict[str, str] = Field(default_factory=dict)
    batch_info: str | None = Field(None, max_length=255)
    is_active: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Himalayan Spring Water",
                    "description": "Naturally alkaline, bottled at source",
                    "size_ml": 750,
                    "price": 199.0,
                    "wholesale_price": 149.0,
                    "stock_quantity": 120,
                    "images": ["https://cdn.example.com/p/himalayan-750.jpg"],
                    "certifications": {"bis": "IS 14543"},
                    "batch_info": "B-2026-10-01",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    size_ml: int | None = None
    price: float | None = Field(None, gt=0)
    wholesale_price: float | None = Field(None, gt=0)
    stock_quantity: int | None = Field(None, ge=0)
    images: list[str] | None = None
    certifications: dict[str, str] | None = None
    batch_info: str | None = Field(None, max_length=255)
    is_active: bool | None = None


class ProductResponse(BaseModel):
    product_id: str
    seller_id: str
    name: str
    description: str | None = None
    size_ml: int
    price: float
    wholesale_price: float | None = None
    stock_quantity: int
    images: list[str] = Field(default_factory=list)
    certifications: dict = Field(default_factory=dict)
    batch_info: str | None = None
    is_active: bool


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)

    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=1)


class CartLineResponse(BaseModel):
    item_id: str
    product_id: str
    name: str
    seller_id: str
    price: float
    stock_quantity: int
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    total: float


class CartCountResponse(BaseModel):
    count: int


class CartItemIdResponse(BaseModel):
    item_id: str


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class ShippingSchema(BaseModel):
    full_name: str = Field(..., max_length=255)
    phone: str = Field(..., max_length=20)
    address: str = Field(..., max_length=500)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    pincode: str = Field(..., max_length=10)


class CheckoutRequest(BaseModel):
    shipping: ShippingSchema
    payment_method: str = Field("cod", pattern="^(cod|online)$")
    notes: str | None = None
    # Restricts which cart lines become orders; the whole cart is still cleared
    item_ids: list[str] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping": {
                        "full_name": "Meera Iyer",
                        "phone": "+91 98450 12345",
                        "address": "12 Lake View Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "pincode": "560001",
                    },
                    "payment_method": "cod",
                }
            ]
        }
    }


class PlacedOrderSchema(BaseModel):
    order_id: str
    order_number: str
    seller_id: str
    total_amount: float


class CheckoutResponse(BaseModel):
    orders: list[PlacedOrderSchema]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., pattern="^(pending|confirmed|shipped|delivered|cancelled)$")


class AddressSchema(BaseModel):
    full_name: str
    phone: str
    address: str
    city: str
    state: str
    pincode: str


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    price_per_unit: float
    total_price: float


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    buyer_id: str
    seller_id: str
    total_amount: float
    status: str
    payment_status: str
    payment_method: str
    shipping_address: AddressSchema
    billing_address: AddressSchema
    notes: str | None = None
    items: list[OrderItemResponse]
    created_at: datetime | None = None


class OrderSummaryResponse(BaseModel):
    order_id: str
    order_number: str
    buyer_id: str
    seller_id: str
    total_amount: float
    status: str
    payment_status: str
    item_count: int
    created_at: datetime | None = None


class SellerDashboardResponse(BaseModel):
    seller_id: str
    product_count: int
    total_orders: int
    pending_orders: int
    revenue: float


class StatusResponse(BaseModel):
    status: str = "ok"
