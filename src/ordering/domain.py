"""Ordering bounded context — Order Management for a small storefront.

Holds the catalogue listings customers can buy, the customers themselves,
their shopping carts, and the orders placed from those carts. Carts and
orders share one line-item engine that keeps every subtotal equal to
unit price times quantity.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
