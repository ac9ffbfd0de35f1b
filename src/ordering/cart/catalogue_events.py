"""Product event handler — keeps open carts on current catalogue prices.

Cart lines are live-priced: when a product's price changes, every cart
holding that product moves the line to the new price and recomputes its
subtotal. Order lines are snapshots and are never touched here.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.cart.cart import Cart
from ordering.domain import ordering
from ordering.product.events import ProductPriceChanged, ProductStatusChanged
from ordering.product.product import ProductStatus

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Cart, stream_category="ordering::product")
class CartPriceTrackingHandler:
    """Reacts to Product events affecting open carts."""

    @handle(ProductPriceChanged)
    def on_product_price_changed(self, event: ProductPriceChanged) -> None:
        repo = current_domain.repository_for(Cart)
        updated = 0
        for cart in repo.find_containing(event.product_id):
            if cart.follow_price(event.product_id, event.new_price):
                repo.add(cart)
                updated += 1

        logger.info(
            "Carts repriced",
            product_id=str(event.product_id),
            new_price=event.new_price,
            cart_count=updated,
        )

    @handle(ProductStatusChanged)
    def on_product_status_changed(self, event: ProductStatusChanged) -> None:
        """Warn when a product in open carts can no longer be bought.

        The lines stay in the cart; checkout refuses them until the product
        is available again.
        """
        if event.new_status == ProductStatus.ACTIVE.value:
            return

        affected = current_domain.repository_for(Cart).find_containing(event.product_id)
        if affected:
            logger.warning(
                "Open carts contain an unavailable product",
                product_id=str(event.product_id),
                status=event.new_status,
                affected_cart_count=len(affected),
            )
