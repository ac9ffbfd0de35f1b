"""Line-item invariant engine shared by cart items and order items.

A line item ties a product to a cart or an order and carries three fields:
``quantity``, ``unit_price`` and ``subtotal``. The functions here are the only
place those fields change, and every change that touches quantity or price
recomputes ``subtotal = unit_price * quantity``.

Cart items track the live product price (``PricePolicy.LIVE``); order items
keep the price captured at checkout (``PricePolicy.SNAPSHOT``). The arithmetic
is the same for both, only the price-mutation rules differ.

None of these functions raise on bad input. Rejected changes leave the item
untouched and return an ``Outcome`` explaining why.
"""

from enum import Enum

import structlog

from ordering.shared import money
from ordering.shared.outcome import APPLIED, Outcome, rejected

logger = structlog.get_logger(__name__)


class PricePolicy(Enum):
    LIVE = "Live"
    SNAPSHOT = "Snapshot"


def _recompute(item) -> None:
    item.subtotal = money.format_amount(money.multiply(item.unit_price, item.quantity))


def set_quantity(item, quantity) -> Outcome:
    """Replace the quantity, recomputing the subtotal when a price is known.

    Positivity is not checked here; ``calculate_subtotal`` and the
    increase/decrease operations guard against non-positive quantities.
    """
    item.quantity = quantity
    if item.unit_price is not None and quantity is not None:
        _recompute(item)
    return APPLIED


def set_unit_price(item, unit_price, policy: PricePolicy) -> Outcome:
    """Replace the unit price, recomputing the subtotal when a quantity is known.

    Under the snapshot policy a price can be set once and never replaced.
    """
    if policy is PricePolicy.SNAPSHOT and item.unit_price is not None:
        logger.debug("Snapshot price is fixed", item_id=str(item.id), unit_price=item.unit_price)
        return rejected("Unit price is fixed once captured")

    item.unit_price = money.format_amount(unit_price)
    if item.quantity is not None and item.unit_price is not None:
        _recompute(item)
    return APPLIED


def calculate_subtotal(item) -> Outcome:
    """Recompute the subtotal from the current price and quantity."""
    if item.unit_price is None or item.quantity is None or item.quantity <= 0:
        logger.debug(
            "Subtotal not recalculated",
            item_id=str(item.id),
            unit_price=item.unit_price,
            quantity=item.quantity,
        )
        return rejected("Price and a positive quantity are required")

    _recompute(item)
    return APPLIED


def increase_quantity(item, delta) -> Outcome:
    if delta is None or delta <= 0 or item.quantity is None:
        return rejected("Increase must be positive")

    logger.debug(
        "Increasing line quantity",
        item_id=str(item.id),
        old_quantity=item.quantity,
        new_quantity=item.quantity + delta,
    )
    return set_quantity(item, item.quantity + delta)


def decrease_quantity(item, delta) -> Outcome:
    """Decrease quantity by ``delta``, never reaching zero.

    The decrease applies only when ``delta`` is positive and strictly less than
    the current quantity. Taking a line to zero is a removal, not a decrease.
    """
    if delta is None or delta <= 0 or item.quantity is None or item.quantity <= delta:
        logger.debug(
            "Decrease rejected",
            item_id=str(item.id),
            quantity=item.quantity,
            delta=delta,
        )
        return rejected("Decrease must be positive and leave at least one unit")

    logger.debug(
        "Decreasing line quantity",
        item_id=str(item.id),
        old_quantity=item.quantity,
        new_quantity=item.quantity - delta,
    )
    return set_quantity(item, item.quantity - delta)


def update_price(item, new_price, policy: PricePolicy) -> Outcome:
    """Follow a product price change. Only live-priced lines accept it."""
    if policy is not PricePolicy.LIVE:
        return rejected("Snapshot prices cannot be updated")
    if not money.is_non_negative(new_price):
        logger.debug("Price update rejected", item_id=str(item.id), new_price=str(new_price))
        return rejected("Price must be zero or more")

    logger.debug(
        "Updating line price",
        item_id=str(item.id),
        old_price=item.unit_price,
        new_price=str(new_price),
    )
    item.unit_price = money.format_amount(new_price)
    calculate_subtotal(item)
    return APPLIED
