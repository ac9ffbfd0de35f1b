"""Order aggregate — a placed purchase with snapshot-priced line items.

An order is created at checkout from the contents of a cart. Each line keeps
the unit price the product had at that moment (``PricePolicy.SNAPSHOT``);
later catalogue price changes never reach an existing order.

Two independent state machines live on the order:

    status:          PENDING → PROCESSING → SHIPPED → DELIVERED
                     PENDING/PROCESSING → CANCELLED, any → REFUNDED
    payment_status:  UNPAID → PAID → REFUNDED

The setters are unconditional. Guards such as ``can_cancel()`` and
``can_refund()`` are separate queries that callers consult first.
"""

import secrets
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text, ValueObject

from ordering.domain import ordering
from ordering.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPaymentCompleted,
    OrderPaymentRefunded,
    OrderPlaced,
    OrderProcessingStarted,
    OrderRefunded,
    OrderShipped,
)
from ordering.shared import line_item, money
from ordering.shared.line_item import PricePolicy
from ordering.shared.money import Money
from ordering.shared.outcome import Outcome


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


class PaymentMethod(Enum):
    CASH = "Cash"
    CREDIT_CARD = "Credit_Card"
    TRANSFER = "Transfer"
    ONLINE = "Online"


class PaymentStatus(Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
    REFUNDED = "Refunded"


# States from which cancellation is allowed
_CANCELLABLE_STATES = {
    OrderStatus.PENDING.value,
    OrderStatus.PROCESSING.value,
}


def generate_order_no(now: datetime | None = None) -> str:
    """Human-readable order number, e.g. ``ORD-20240131120501-9F2C4A``."""
    now = now or datetime.now(UTC)
    return f"ORD-{now:%Y%m%d%H%M%S}-{secrets.token_hex(3).upper()}"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = String(max_length=32)
    subtotal = String(max_length=32)

    @classmethod
    def snapshot(cls, product, quantity):
        """Line for ``quantity`` units at the product's price right now."""
        item = cls(product_id=product.id, quantity=quantity)
        item.set_unit_price(product.unit_price)
        item.calculate_subtotal()
        return item

    def set_quantity(self, quantity) -> Outcome:
        return line_item.set_quantity(self, quantity)

    def set_unit_price(self, unit_price) -> Outcome:
        """Capture the unit price. Once captured it cannot be replaced."""
        return line_item.set_unit_price(self, unit_price, PricePolicy.SNAPSHOT)

    def calculate_subtotal(self) -> Outcome:
        return line_item.calculate_subtotal(self)

    def increase_quantity(self, delta) -> Outcome:
        return line_item.increase_quantity(self, delta)

    def decrease_quantity(self, delta) -> Outcome:
        return line_item.decrease_quantity(self, delta)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_no = String(required=True, max_length=50, unique=True)
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = ValueObject(Money)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_method = String(choices=PaymentMethod)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.UNPAID.value)
    shipping_address = String(max_length=500)
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, lines, payment_method=None, shipping_address=None, notes=None):
        """Create an order from ``(product, quantity)`` pairs.

        Prices are read from the products as they are now and frozen on the
        order lines.
        """
        now = datetime.now(UTC)
        items = [OrderItem.snapshot(product, quantity) for product, quantity in lines]
        order = cls(
            order_no=generate_order_no(now),
            customer_id=customer_id,
            items=items,
            total_amount=Money.of(money.total(item.subtotal for item in items)),
            payment_method=payment_method,
            shipping_address=shipping_address,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_no=order.order_no,
                customer_id=str(customer_id),
                total_amount=order.total_amount.amount,
                payment_method=payment_method,
                item_count=len(items),
                placed_at=now,
            )
        )
        return order

    def calculate_total(self) -> Decimal:
        """Sum of line subtotals. ``total_amount`` holds the figure fixed at checkout."""
        return money.total(item.subtotal for item in self.items)

    def charged_amount(self) -> str:
        """The settled total as a decimal string, zero when none was recorded."""
        if self.total_amount is None:
            return money.format_amount(money.ZERO)
        return self.total_amount.amount

    # -------------------------------------------------------------------
    # Fulfilment status
    # -------------------------------------------------------------------
    def can_cancel(self) -> bool:
        return self.status in _CANCELLABLE_STATES

    def cancel(self, reason=None):
        """Mark the order cancelled. Check ``can_cancel()`` first."""
        previous = self.status
        if self._set_status(OrderStatus.CANCELLED):
            self.raise_(OrderCancelled(order_id=str(self.id), previous_status=previous, reason=reason))

    def mark_as_processing(self):
        if self._set_status(OrderStatus.PROCESSING):
            self.raise_(OrderProcessingStarted(order_id=str(self.id)))

    def mark_as_shipped(self):
        if self._set_status(OrderStatus.SHIPPED):
            self.raise_(OrderShipped(order_id=str(self.id), shipped_at=self.updated_at))

    def mark_as_delivered(self):
        if self._set_status(OrderStatus.DELIVERED):
            self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=self.updated_at))

    def mark_as_refunded(self):
        previous = self.status
        if self._set_status(OrderStatus.REFUNDED):
            self.raise_(OrderRefunded(order_id=str(self.id), previous_status=previous))

    def _set_status(self, target) -> bool:
        """Assign ``target``; True when the status actually moved."""
        moved = self.status != target.value
        self.status = target.value
        if moved:
            self.updated_at = datetime.now(UTC)
        return moved

    # -------------------------------------------------------------------
    # Payment status
    # -------------------------------------------------------------------
    def complete_payment(self):
        """Record payment. Fulfilment status is left as it is."""
        if self._set_payment_status(PaymentStatus.PAID):
            self.raise_(
                OrderPaymentCompleted(
                    order_id=str(self.id),
                    amount=self.charged_amount(),
                    payment_method=self.payment_method,
                )
            )

    def can_refund(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    def refund_payment(self):
        """Mark the payment refunded. Check ``can_refund()`` first."""
        if self._set_payment_status(PaymentStatus.REFUNDED):
            self.raise_(
                OrderPaymentRefunded(
                    order_id=str(self.id),
                    amount=self.charged_amount(),
                )
            )

    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    def _set_payment_status(self, target) -> bool:
        moved = self.payment_status != target.value
        self.payment_status = target.value
        if moved:
            self.updated_at = datetime.now(UTC)
        return moved
