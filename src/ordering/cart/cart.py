"""Shopping Cart aggregate — one per customer, holding live-priced line items.

Cart lines follow their product's current price (``PricePolicy.LIVE``), so the
cart total shown to a customer always reflects today's catalogue. The total is
never stored; ``total()`` sums the line subtotals on demand.

Item operations are lenient: a rejected change (non-positive quantity, unknown
line) leaves the cart as it was and returns an ``Outcome`` saying why.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartCleared,
    CartCreated,
    CartItemAdded,
    CartItemPriceChanged,
    CartItemQuantityChanged,
    CartItemRemoved,
)
from ordering.domain import ordering
from ordering.shared import line_item, money
from ordering.shared.line_item import PricePolicy
from ordering.shared.outcome import APPLIED, Outcome, rejected


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = String(max_length=32)
    subtotal = String(max_length=32)
    added_at = DateTime()

    @classmethod
    def for_product(cls, product, quantity):
        """New line for ``quantity`` units priced at the product's current price."""
        item = cls(product_id=product.id, quantity=quantity, added_at=datetime.now(UTC))
        item.set_unit_price(product.unit_price)
        return item

    def set_quantity(self, quantity) -> Outcome:
        return line_item.set_quantity(self, quantity)

    def set_unit_price(self, unit_price) -> Outcome:
        return line_item.set_unit_price(self, unit_price, PricePolicy.LIVE)

    def calculate_subtotal(self) -> Outcome:
        return line_item.calculate_subtotal(self)

    def increase_quantity(self, delta) -> Outcome:
        return line_item.increase_quantity(self, delta)

    def decrease_quantity(self, delta) -> Outcome:
        return line_item.decrease_quantity(self, delta)

    def update_price(self, new_price) -> Outcome:
        return line_item.update_price(self, new_price, PricePolicy.LIVE)

    def is_product_valid(self, product=None) -> bool:
        """Whether the line's product can still be bought.

        Active and out-of-stock are checked separately; a product must be
        active and not out of stock.
        """
        if product is None or str(product.id) != str(self.product_id):
            return False
        return product.is_active() and not product.is_out_of_stock()


@ordering.aggregate
class Cart:
    customer_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        cart = cls(customer_id=customer_id, created_at=now, updated_at=now)
        cart.raise_(CartCreated(cart_id=str(cart.id), customer_id=str(customer_id)))
        return cart

    # -------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------
    def find_item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def is_empty(self) -> bool:
        return not self.items

    def total(self) -> Decimal:
        """Sum of the current line subtotals."""
        return money.total(item.subtotal for item in self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity) -> Outcome:
        """Add ``quantity`` units of ``product``, merging into an existing line."""
        if quantity is None or quantity <= 0:
            return rejected("Quantity must be positive")

        existing = self.item_for_product(product.id)
        if existing is not None:
            existing.increase_quantity(quantity)
            item = existing
        else:
            item = CartItem.for_product(product, quantity)
            self.add_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product.id),
                quantity=quantity,
                unit_price=item.unit_price,
            )
        )
        return APPLIED

    def update_item(self, item_id, quantity) -> Outcome:
        """Set a line's quantity. Use ``remove_item`` to take it to zero."""
        if quantity is None or quantity <= 0:
            return rejected("Quantity must be positive")

        item = self.find_item(item_id)
        if item is None:
            return rejected("Item not found in cart")

        previous_quantity = item.quantity
        if previous_quantity == quantity:
            return APPLIED

        item.set_quantity(quantity)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return APPLIED

    def remove_item(self, item_id) -> Outcome:
        item = self.find_item(item_id)
        if item is None:
            return rejected("Item not found in cart")

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))
        return APPLIED

    def clear(self) -> Outcome:
        count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), items_removed=count))
        return APPLIED

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def follow_price(self, product_id, new_price) -> Outcome:
        """Move the line holding ``product_id`` to the product's new price."""
        item = self.item_for_product(product_id)
        if item is None:
            return rejected("Product is not in this cart")

        previous_price = item.unit_price
        outcome = item.update_price(new_price)
        if not outcome:
            return outcome

        if money.to_decimal(previous_price) != money.to_decimal(item.unit_price):
            self.updated_at = datetime.now(UTC)
            self.raise_(
                CartItemPriceChanged(
                    cart_id=str(self.id),
                    item_id=str(item.id),
                    product_id=str(product_id),
                    previous_price=previous_price,
                    new_price=item.unit_price,
                )
            )
        return APPLIED

    def refresh_prices(self, products) -> list[str]:
        """Bring every line to its product's current price.

        ``products`` maps product id to Product. Returns the ids of the lines
        whose price moved.
        """
        changed = []
        for item in list(self.items):
            product = products.get(str(item.product_id))
            if product is None:
                continue
            previous_price = item.unit_price
            self.follow_price(product.id, product.unit_price)
            if money.to_decimal(previous_price) != money.to_decimal(item.unit_price):
                changed.append(str(item.id))
        return changed

    def invalid_items(self, products) -> list:
        """Lines whose product is missing or can no longer be bought."""
        return [item for item in self.items if not item.is_product_valid(products.get(str(item.product_id)))]

    # -------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------
    def get_owner_name(self, customer, user) -> str:
        """Username of the cart's owner, or ``""`` when the chain is broken.

        ``customer`` must be this cart's customer and ``user`` that
        customer's user.
        """
        if customer is None or user is None:
            return ""
        if str(customer.id) != str(self.customer_id) or str(customer.user_id) != str(user.id):
            return ""
        return user.username or ""
