"""Exact decimal arithmetic for prices, subtotals and totals.

Amounts are persisted as canonical decimal strings at a fixed scale and
converted to ``Decimal`` for every calculation, so ``unit_price * quantity``
never goes through binary floating point. ``Money`` wraps one such amount as
a value object for aggregates that carry a settled figure.
"""

import os
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from ordering.domain import ordering

ZERO = Decimal("0")


def get_scale() -> int:
    """Number of decimal places kept for monetary amounts."""
    return int(os.getenv("MONEY_SCALE", "2"))


def _quantum() -> Decimal:
    return Decimal(1).scaleb(-get_scale())


def to_decimal(value) -> Decimal | None:
    """Convert a stored or user-supplied amount to ``Decimal``.

    Returns ``None`` for missing or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def quantize(value) -> Decimal | None:
    """Round an amount to the configured scale."""
    amount = to_decimal(value)
    if amount is None:
        return None
    return amount.quantize(_quantum(), rounding=ROUND_HALF_UP)


def format_amount(value) -> str | None:
    """Canonical string form of an amount, as stored on entities."""
    amount = quantize(value)
    if amount is None:
        return None
    return str(amount)


def is_non_negative(value) -> bool:
    amount = to_decimal(value)
    return amount is not None and amount >= ZERO


def multiply(unit_price, quantity: int) -> Decimal:
    """Subtotal for ``quantity`` units at ``unit_price``."""
    return quantize(to_decimal(unit_price) * Decimal(quantity))


def total(amounts: Iterable) -> Decimal:
    """Sum of amounts, skipping missing values."""
    result = sum(
        (amount for amount in (to_decimal(a) for a in amounts) if amount is not None),
        ZERO,
    )
    return quantize(result)


@ordering.value_object
class Money:
    """A non-negative amount in canonical decimal form."""

    amount: String(required=True, max_length=32)

    @invariant.post
    def amount_must_be_non_negative(self):
        if not is_non_negative(self.amount):
            raise ValidationError({"amount": [f"Invalid amount: {self.amount!r}"]})

    @classmethod
    def of(cls, value) -> "Money":
        return cls(amount=format_amount(value))

    def as_decimal(self) -> Decimal:
        return to_decimal(self.amount)
