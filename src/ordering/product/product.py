"""Product aggregate — a purchasable catalogue listing.

A product carries a unit price and an availability status. Status moves are
free-form: any of Active, Inactive and OutOfStock can follow any other.
Line items consult ``is_active()`` and ``is_out_of_stock()`` to decide
whether the product can still be bought.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from ordering.domain import ordering
from ordering.product.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductPriceChanged,
    ProductStatusChanged,
)
from ordering.shared import money
from ordering.shared.outcome import APPLIED, Outcome, rejected


class ProductStatus(Enum):
    """Listing lifecycle of a product."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    OUT_OF_STOCK = "OutOfStock"


@ordering.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=50)
    product_type: String(required=True, max_length=100)
    unit_price: String(required=True, max_length=32)
    description: Text()
    image_url: String(max_length=500)
    status: String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_not_be_negative(self):
        if self.unit_price is None:
            return
        if not money.is_non_negative(self.unit_price):
            raise ValidationError({"unit_price": ["Price must be a number greater than or equal to zero"]})

    @classmethod
    def create(cls, name, product_type, unit_price, description=None, image_url=None, status=None):
        now = datetime.now(UTC)
        price = money.format_amount(unit_price)
        product = cls(
            name=name,
            product_type=product_type,
            unit_price=price if price is not None else unit_price,
            description=description,
            image_url=image_url,
            status=status or ProductStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                product_type=product.product_type,
                unit_price=product.unit_price,
                status=product.status,
                added_at=now,
            )
        )
        return product

    def update_details(self, name=None, product_type=None, description=None, image_url=None):
        if name is not None:
            self.name = name
        if product_type is not None:
            self.product_type = product_type
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                product_type=self.product_type,
                description=self.description,
                image_url=self.image_url,
            )
        )

    def change_price(self, new_price) -> Outcome:
        """Set a new unit price. Negative or unreadable prices are ignored."""
        if not money.is_non_negative(new_price):
            return rejected("Price must be zero or more")

        previous_price = self.unit_price
        new_amount = money.format_amount(new_price)
        if money.to_decimal(previous_price) == money.to_decimal(new_amount):
            return APPLIED

        now = datetime.now(UTC)
        self.unit_price = new_amount
        self.updated_at = now

        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                previous_price=previous_price,
                new_price=new_amount,
                changed_at=now,
            )
        )
        return APPLIED

    # -------------------------------------------------------------------
    # Availability
    # -------------------------------------------------------------------
    def activate(self):
        self._set_status(ProductStatus.ACTIVE)

    def deactivate(self):
        self._set_status(ProductStatus.INACTIVE)

    def mark_as_out_of_stock(self):
        self._set_status(ProductStatus.OUT_OF_STOCK)

    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    def is_out_of_stock(self) -> bool:
        return self.status == ProductStatus.OUT_OF_STOCK.value

    def _set_status(self, target):
        previous = self.status
        self.status = target.value
        if previous == target.value:
            return

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            ProductStatusChanged(
                product_id=self.id,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
