"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    product_type: String(required=True)
    unit_price: String(required=True)
    status: String(required=True)
    added_at: DateTime(required=True)


@ordering.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive details of a product were changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    product_type: String(required=True)
    description: String()
    image_url: String()


@ordering.event(part_of="Product")
class ProductPriceChanged:
    """The unit price of a product was changed.

    Carts holding the product pick up the new price; orders already placed
    keep the price captured at checkout.
    """

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: String()
    new_price: String(required=True)
    changed_at: DateTime(required=True)


@ordering.event(part_of="Product")
class ProductStatusChanged:
    """A product moved between Active, Inactive and OutOfStock."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)
