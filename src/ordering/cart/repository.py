"""Repository for the Cart aggregate."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart, CartItem
from ordering.domain import ordering


@ordering.repository(part_of=Cart)
class CartRepository:
    def find_by_id(self, cart_id) -> Cart | None:
        try:
            return self.get(cart_id)
        except ObjectNotFoundError:
            return None

    def find_all(self) -> list[Cart]:
        return self._dao.query.order_by("created_at").all().items

    def find_by_customer(self, customer_id) -> Cart | None:
        return self._dao.query.filter(customer_id=str(customer_id)).all().first

    def find_containing(self, product_id) -> list[Cart]:
        """Carts with a line for ``product_id``, looked up through the item table."""
        items = current_domain.repository_for(CartItem)._dao.query.filter(product_id=str(product_id)).all().items
        cart_ids = dict.fromkeys(str(item.cart_id) for item in items)
        return [self.get(cart_id) for cart_id in cart_ids]

    def delete(self, cart: Cart) -> None:
        """Delete the cart together with any item rows still stored for it."""
        items = current_domain.repository_for(CartItem)._dao
        for item in items.query.filter(cart_id=str(cart.id)).all().items:
            items.delete(item)
        self._dao.delete(cart)
