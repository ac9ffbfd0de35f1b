"""Cart owner lookup across the Cart → Customer → User chain."""

from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.customer.customer import Customer
from ordering.customer.user import User


def resolve_owner_name(cart: Cart) -> str:
    """Username of the user owning ``cart``; ``""`` if any link is missing."""
    customer = current_domain.repository_for(Customer).find_by_id(cart.customer_id)
    if customer is None:
        return ""
    user = current_domain.repository_for(User).find_by_id(customer.user_id)
    return cart.get_owner_name(customer, user)
