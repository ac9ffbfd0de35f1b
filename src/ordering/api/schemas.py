"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Amounts travel as decimal strings so no
precision is lost on the way in or out.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str = Field(max_length=50)
    product_type: str = Field(max_length=100)
    unit_price: str
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=500)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Espresso Beans",
                    "product_type": "Coffee",
                    "unit_price": "12.50",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, max_length=50)
    product_type: str | None = Field(default=None, max_length=100)
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=500)


class ChangePriceRequest(BaseModel):
    unit_price: str


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    product_type: str
    unit_price: str
    description: str | None = None
    image_url: str | None = None
    status: str
    is_active: bool
    is_out_of_stock: bool


# ---------------------------------------------------------------------------
# Users & customers
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    username: str = Field(max_length=50)
    email: str = Field(max_length=100)
    password: str = Field(min_length=1, max_length=128)
    role: str | None = None


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    user_id: str
    username: str
    email: str
    role: str
    enabled: bool
    is_admin: bool


class RegisterCustomerRequest(BaseModel):
    user_id: str
    name: str = Field(max_length=100)
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    birthday: str | None = None  # ISO date
    gender: str | None = None


class ChangeAddressRequest(BaseModel):
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    phone: str | None = None
    birthday: str | None = None  # ISO date
    gender: str | None = None


class CustomerIdResponse(BaseModel):
    customer_id: str


class CustomerResponse(BaseModel):
    customer_id: str
    user_id: str
    name: str
    phone: str | None = None
    full_address: str
    gender: str | None = None


# ---------------------------------------------------------------------------
# Carts
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    customer_id: str
    product_id: str
    quantity: int = Field(ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=1)


class CartIdResponse(BaseModel):
    cart_id: str


class CartItemResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    unit_price: str | None = None
    subtotal: str | None = None
    is_product_valid: bool


class CartResponse(BaseModel):
    cart_id: str
    customer_id: str
    owner_name: str
    items: list[CartItemResponse]
    total: str


class CheckoutRequest(BaseModel):
    payment_method: str | None = None
    shipping_address: str | None = Field(default=None, max_length=500)
    notes: str | None = None


class RepricedResponse(BaseModel):
    repriced_item_ids: list[str]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    unit_price: str | None = None
    subtotal: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    order_no: str
    customer_id: str
    status: str
    payment_method: str | None = None
    payment_status: str
    total_amount: str | None = None
    shipping_address: str | None = None
    notes: str | None = None
    can_cancel: bool
    items: list[OrderItemResponse]
