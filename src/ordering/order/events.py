"""Domain events for the Order aggregate.

Fulfilment status and payment status move independently, so each has its
own set of events.
"""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """An order was created from a cart at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_no = String(required=True)
    customer_id = Identifier(required=True)
    total_amount = String(required=True)
    payment_method = String()
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    reason = String()


@ordering.event(part_of="Order")
class OrderProcessingStarted:
    __version__ = 1

    order_id = Identifier(required=True)


@ordering.event(part_of="Order")
class OrderShipped:
    __version__ = 1

    order_id = Identifier(required=True)
    shipped_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderRefunded:
    """The order itself was closed out as refunded."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)


@ordering.event(part_of="Order")
class OrderPaymentCompleted:
    """Payment for the order was received."""

    __version__ = 1

    order_id = Identifier(required=True)
    amount = String(required=True)
    payment_method = String()


@ordering.event(part_of="Order")
class OrderPaymentRefunded:
    __version__ = 1

    order_id = Identifier(required=True)
    amount = String(required=True)
