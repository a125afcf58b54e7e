"""Pydantic request/response schemas for the storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean aggregates.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class ProductSchema(BaseModel):
    id: str
    name_english: str
    name_hindi: str | None = None
    name_marathi: str | None = None
    price: float
    unit: str
    category: str
    in_stock: bool
    featured: bool
    image: str | None = None


class ProductListResponse(BaseModel):
    success: bool = True
    products: list[ProductSchema]
    count: int
    timestamp: str


class CategorySchema(BaseModel):
    id: str
    count: int


class CategoryListResponse(BaseModel):
    success: bool = True
    categories: list[CategorySchema]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1

    model_config = {
        "json_schema_extra": {
            "examples": [{"product_id": "buffalo-ghee", "quantity": 2}],
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineSchema(BaseModel):
    product_id: str
    name_english: str
    name_hindi: str | None = None
    price: float
    unit: str
    quantity: int
    subtotal: float
    in_stock: bool
    image: str | None = None


class CartResponse(BaseModel):
    success: bool = True
    session_id: str
    items: list[CartLineSchema]
    item_count: int
    unique_item_count: int
    subtotal: float
    delivery_charge: float
    total: float


# ---------------------------------------------------------------------------
# Checkout & orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    name: str = ""
    phone: str = ""
    address: str = ""
    delivery_slot: str = ""
    email: str | None = None
    landmark: str | None = None
    special_instructions: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Patil",
                    "phone": "9876543210",
                    "address": "12 Station Road, Kalyan West",
                    "delivery_slot": "Morning (7 AM - 10 AM)",
                    "email": "asha@example.com",
                }
            ]
        }
    }


class CustomerSchema(BaseModel):
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    email: str | None = None
    landmark: str | None = None


class OrderItemSchema(BaseModel):
    product_id: str
    name_english: str | None = None
    name_hindi: str | None = None
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    unit: str | None = None
    subtotal: float | None = None


class SubmitOrderRequest(BaseModel):
    """A complete order built by the client. Presence rules are checked server-side."""

    order_id: str | None = None
    user_id: str | None = None
    customer: CustomerSchema | None = None
    items: list[OrderItemSchema] = Field(default_factory=list)
    delivery_slot: str | None = None
    special_instructions: str | None = None
    subtotal: float | None = None
    delivery_charge: float | None = None
    total: float | None = None


class OrderPlacedResponse(BaseModel):
    success: bool = True
    message: str = "Order received successfully"
    order_id: str


class OrderListResponse(BaseModel):
    success: bool = True
    orders: list[dict]
    count: int


class OrderResponse(BaseModel):
    success: bool = True
    order: dict


class StatusResponse(BaseModel):
    status: str = "ok"
