"""Checkout — turns a customer's cart into an order.

Prices come from the products as they stand at checkout, not from the cart
lines, so an order is never placed at a stale price. Once the order is
stored the cart is emptied and discarded.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.order import Order, PaymentMethod
from ordering.product.product import Product

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CheckoutCart:
    """Place an order for everything in the cart."""

    cart_id = Identifier(required=True)
    payment_method = String(choices=PaymentMethod)
    shipping_address = String(max_length=500)  # Defaults to the customer's address
    notes = Text()


@ordering.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(CheckoutCart)
    def checkout_cart(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get(command.cart_id)
        if cart.is_empty():
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

        customer = current_domain.repository_for(Customer).get(cart.customer_id)
        products = current_domain.repository_for(Product).find_many(item.product_id for item in cart.items)

        unavailable = cart.invalid_items(products)
        if unavailable:
            raise ValidationError(
                {"items": [f"Product {item.product_id} is not available for purchase" for item in unavailable]}
            )

        order = Order.place(
            customer_id=cart.customer_id,
            lines=[(products[str(item.product_id)], item.quantity) for item in cart.items],
            payment_method=command.payment_method,
            shipping_address=command.shipping_address or customer.full_address() or None,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear()
        cart_repo.add(cart)
        cart_repo.delete(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_no=order.order_no,
            customer_id=str(order.customer_id),
            total_amount=order.charged_amount(),
        )
        return str(order.id)
