"""FastAPI routes for the Ordering domain — products, accounts, carts and orders.

Reads go straight to the repositories; every write is a command processed
synchronously through the domain.
"""

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddProductRequest,
    AddToCartRequest,
    CancelOrderRequest,
    CartIdResponse,
    CartItemResponse,
    CartResponse,
    ChangeAddressRequest,
    ChangePriceRequest,
    CheckoutRequest,
    CustomerIdResponse,
    CustomerResponse,
    OrderIdResponse,
    OrderItemResponse,
    OrderResponse,
    ProductIdResponse,
    ProductResponse,
    RegisterCustomerRequest,
    RegisterUserRequest,
    RepricedResponse,
    StatusResponse,
    UpdateCartItemRequest,
    UpdateProductRequest,
    UpdateProfileRequest,
    UserIdResponse,
    UserResponse,
)
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart, ClearCart, RefreshCartPrices, RemoveCartItem, UpdateCartItem
from ordering.cart.ownership import resolve_owner_name
from ordering.checkout.checkout import CheckoutCart
from ordering.customer.customer import Customer
from ordering.customer.registration import (
    ChangeCustomerAddress,
    DisableUser,
    EnableUser,
    RegisterCustomer,
    RegisterUser,
    RemoveCustomer,
    RemoveUser,
    UpdateCustomerProfile,
)
from ordering.customer.user import User
from ordering.order.lifecycle import (
    CancelOrder,
    CompletePayment,
    DeliverOrder,
    MarkOrderRefunded,
    RefundPayment,
    ShipOrder,
    StartProcessing,
)
from ordering.order.order import Order
from ordering.product.management import (
    ActivateProduct,
    AddProduct,
    ChangeProductPrice,
    DeactivateProduct,
    MarkProductOutOfStock,
    RemoveProduct,
    UpdateProductDetails,
)
from ordering.product.product import Product
from ordering.shared import money


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        product_type=product.product_type,
        unit_price=product.unit_price,
        description=product.description,
        image_url=product.image_url,
        status=product.status,
        is_active=product.is_active(),
        is_out_of_stock=product.is_out_of_stock(),
    )


def _user_response(user) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        username=user.username,
        email=user.email.address,
        role=user.role,
        enabled=user.enabled,
        is_admin=user.is_admin(),
    )


def _customer_response(customer) -> CustomerResponse:
    return CustomerResponse(
        customer_id=str(customer.id),
        user_id=str(customer.user_id),
        name=customer.name,
        phone=customer.phone,
        full_address=customer.full_address(),
        gender=customer.gender,
    )


def _cart_response(cart) -> CartResponse:
    products = current_domain.repository_for(Product).find_many(item.product_id for item in cart.items)
    return CartResponse(
        cart_id=str(cart.id),
        customer_id=str(cart.customer_id),
        owner_name=resolve_owner_name(cart),
        items=[
            CartItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
                is_product_valid=item.is_product_valid(products.get(str(item.product_id))),
            )
            for item in cart.items
        ],
        total=money.format_amount(cart.total()),
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        order_no=order.order_no,
        customer_id=str(order.customer_id),
        status=order.status,
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        total_amount=order.charged_amount(),
        shipping_address=order.shipping_address,
        notes=order.notes,
        can_cancel=order.can_cancel(),
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
            )
            for item in order.items
        ],
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        product_type=body.product_type,
        unit_price=body.unit_price,
        description=body.description,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=list[ProductResponse])
async def list_products(status: str | None = None) -> list[ProductResponse]:
    repo = current_domain.repository_for(Product)
    products = repo.find_by_status(status) if status else repo.find_all()
    return [_product_response(p) for p in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        product_type=body.product_type,
        description=body.description,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def change_product_price(product_id: str, body: ChangePriceRequest) -> StatusResponse:
    command = ChangeProductPrice(product_id=product_id, new_price=body.unit_price)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/activate", response_model=StatusResponse)
async def activate_product(product_id: str) -> StatusResponse:
    current_domain.process(ActivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str) -> StatusResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/out-of-stock", response_model=StatusResponse)
async def mark_product_out_of_stock(product_id: str) -> StatusResponse:
    current_domain.process(MarkProductOutOfStock(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Account Router
# ---------------------------------------------------------------------------
account_router = APIRouter(tags=["accounts"])


@account_router.post("/users", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@account_router.get("/users", response_model=list[UserResponse])
async def list_users() -> list[UserResponse]:
    return [_user_response(u) for u in current_domain.repository_for(User).find_all()]


@account_router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    return _user_response(current_domain.repository_for(User).get(user_id))


@account_router.delete("/users/{user_id}", response_model=StatusResponse)
async def remove_user(user_id: str) -> StatusResponse:
    current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@account_router.put("/users/{user_id}/enable", response_model=StatusResponse)
async def enable_user(user_id: str) -> StatusResponse:
    current_domain.process(EnableUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@account_router.put("/users/{user_id}/disable", response_model=StatusResponse)
async def disable_user(user_id: str) -> StatusResponse:
    current_domain.process(DisableUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@account_router.post("/customers", status_code=201, response_model=CustomerIdResponse)
async def register_customer(body: RegisterCustomerRequest) -> CustomerIdResponse:
    command = RegisterCustomer(**body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return CustomerIdResponse(customer_id=result)


@account_router.get("/customers", response_model=list[CustomerResponse])
async def list_customers() -> list[CustomerResponse]:
    return [_customer_response(c) for c in current_domain.repository_for(Customer).find_all()]


@account_router.get("/customers/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str) -> CustomerResponse:
    return _customer_response(current_domain.repository_for(Customer).get(customer_id))


@account_router.put("/customers/{customer_id}", response_model=StatusResponse)
async def update_customer_profile(customer_id: str, body: UpdateProfileRequest) -> StatusResponse:
    command = UpdateCustomerProfile(customer_id=customer_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@account_router.delete("/customers/{customer_id}", response_model=StatusResponse)
async def remove_customer(customer_id: str) -> StatusResponse:
    current_domain.process(RemoveCustomer(customer_id=customer_id), asynchronous=False)
    return StatusResponse()


@account_router.put("/customers/{customer_id}/address", response_model=StatusResponse)
async def change_customer_address(customer_id: str, body: ChangeAddressRequest) -> StatusResponse:
    command = ChangeCustomerAddress(customer_id=customer_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("/items", status_code=201, response_model=CartIdResponse)
async def add_to_cart(body: AddToCartRequest) -> CartIdResponse:
    command = AddToCart(
        customer_id=body.customer_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.put("/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def update_cart_item(cart_id: str, item_id: str, body: UpdateCartItemRequest) -> StatusResponse:
    command = UpdateCartItem(cart_id=cart_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(cart_id: str, item_id: str) -> StatusResponse:
    current_domain.process(RemoveCartItem(cart_id=cart_id, item_id=item_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}", response_model=StatusResponse)
async def clear_cart(cart_id: str) -> StatusResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/refresh-prices", response_model=RepricedResponse)
async def refresh_cart_prices(cart_id: str) -> RepricedResponse:
    changed = current_domain.process(RefreshCartPrices(cart_id=cart_id), asynchronous=False)
    return RepricedResponse(repriced_item_ids=changed or [])


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(cart_id: str, body: CheckoutRequest) -> OrderIdResponse:
    command = CheckoutCart(
        cart_id=cart_id,
        payment_method=body.payment_method,
        shipping_address=body.shipping_address,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(customer_id: str | None = None, status: str | None = None) -> list[OrderResponse]:
    repo = current_domain.repository_for(Order)
    if customer_id:
        orders = repo.find_by_customer(customer_id)
        if status:
            orders = [o for o in orders if o.status == status]
    elif status:
        orders = repo.find_by_status(status)
    else:
        orders = repo.find_all()
    return [_order_response(o) for o in orders]


@order_router.get("/number/{order_no}", response_model=OrderResponse)
async def get_order_by_number(order_no: str) -> OrderResponse:
    order = current_domain.repository_for(Order).find_by_order_no(order_no)
    if order is None:
        raise ObjectNotFoundError(f"Order {order_no} not found")
    return _order_response(order)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> StatusResponse:
    current_domain.process(CancelOrder(order_id=order_id, reason=body.reason), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/payment", response_model=StatusResponse)
async def complete_payment(order_id: str) -> StatusResponse:
    current_domain.process(CompletePayment(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/processing", response_model=StatusResponse)
async def start_processing(order_id: str) -> StatusResponse:
    current_domain.process(StartProcessing(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/shipment", response_model=StatusResponse)
async def ship_order(order_id: str) -> StatusResponse:
    current_domain.process(ShipOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/delivery", response_model=StatusResponse)
async def deliver_order(order_id: str) -> StatusResponse:
    current_domain.process(DeliverOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/refund", response_model=StatusResponse)
async def refund_payment(order_id: str) -> StatusResponse:
    current_domain.process(RefundPayment(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/refunded", response_model=StatusResponse)
async def mark_order_refunded(order_id: str) -> StatusResponse:
    current_domain.process(MarkOrderRefunded(order_id=order_id), asynchronous=False)
    return StatusResponse()
