"""Order lifecycle — fulfilment and payment commands with their handler.

Entity setters on Order are unconditional; this handler is where the guards
are enforced before a transition is applied.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus, PaymentStatus

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(max_length=500)


@ordering.command(part_of="Order")
class CompletePayment:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class StartProcessing:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class ShipOrder:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class DeliverOrder:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class RefundPayment:
    """Refund the payment of a paid order. Fulfilment status is left alone."""

    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class MarkOrderRefunded:
    """Close out an order whose payment has been refunded."""

    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if not order.can_cancel():
            raise ValidationError({"status": [f"Order in {order.status} state cannot be cancelled"]})

        order.cancel(reason=command.reason)
        repo.add(order)
        logger.info("Order cancelled", order_id=str(order.id), order_no=order.order_no)

    @handle(CompletePayment)
    def complete_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.complete_payment()
        repo.add(order)

    @handle(StartProcessing)
    def start_processing(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if order.status != OrderStatus.PENDING.value:
            raise ValidationError({"status": [f"Order in {order.status} state cannot start processing"]})
        order.mark_as_processing()
        repo.add(order)

    @handle(ShipOrder)
    def ship_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if order.status not in (OrderStatus.PENDING.value, OrderStatus.PROCESSING.value):
            raise ValidationError({"status": [f"Order in {order.status} state cannot be shipped"]})
        order.mark_as_shipped()
        repo.add(order)

    @handle(DeliverOrder)
    def deliver_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if order.status != OrderStatus.SHIPPED.value:
            raise ValidationError({"status": [f"Order in {order.status} state cannot be delivered"]})
        order.mark_as_delivered()
        repo.add(order)

    @handle(RefundPayment)
    def refund_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if not order.can_refund():
            raise ValidationError({"payment_status": ["Only paid orders can be refunded"]})

        order.refund_payment()
        repo.add(order)
        logger.info("Payment refunded", order_id=str(order.id), amount=order.charged_amount())

    @handle(MarkOrderRefunded)
    def mark_order_refunded(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if order.payment_status != PaymentStatus.REFUNDED.value:
            raise ValidationError({"payment_status": ["Refund the payment before closing out the order"]})
        if order.status == OrderStatus.REFUNDED.value:
            raise ValidationError({"status": ["Order is already refunded"]})

        order.mark_as_refunded()
        repo.add(order)
        logger.info("Order closed out as refunded", order_id=str(order.id), order_no=order.order_no)
