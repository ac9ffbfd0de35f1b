"""Cart item management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.product.product import Product

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Cart")
class AddToCart:
    """Put a product into the customer's cart, opening the cart if needed."""

    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="Cart")
class UpdateCartItem:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="Cart")
class RemoveCartItem:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    """Empty the cart and discard it."""

    cart_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class RefreshCartPrices:
    cart_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        current_domain.repository_for(Customer).get(command.customer_id)
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.is_active() or product.is_out_of_stock():
            raise ValidationError({"product_id": ["Product is not available for purchase"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_customer(command.customer_id)
        if cart is None:
            cart = Cart.create(customer_id=command.customer_id)
            logger.info("Cart opened", cart_id=str(cart.id), customer_id=str(command.customer_id))

        outcome = cart.add_item(product, command.quantity)
        if not outcome:
            raise ValidationError({"quantity": [outcome.reason]})

        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        outcome = cart.update_item(command.item_id, command.quantity)
        if not outcome:
            raise ValidationError({"item_id": [outcome.reason]})
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        outcome = cart.remove_item(command.item_id)
        if not outcome:
            raise ValidationError({"item_id": [outcome.reason]})
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
        repo.delete(cart)
        logger.info("Cart cleared", cart_id=str(command.cart_id))

    @handle(RefreshCartPrices)
    def refresh_cart_prices(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        products = current_domain.repository_for(Product).find_many(item.product_id for item in cart.items)
        changed = cart.refresh_prices(products)
        if changed:
            repo.add(cart)
        return changed
