"""Domain events for the User and Customer aggregates."""

from protean.fields import Date, DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="User")
class UserRegistered:
    """A login account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@ordering.event(part_of="User")
class UserEnabled:
    __version__ = 1

    user_id: Identifier(required=True)


@ordering.event(part_of="User")
class UserDisabled:
    __version__ = 1

    user_id: Identifier(required=True)


@ordering.event(part_of="Customer")
class CustomerRegistered:
    """A shopper profile was attached to a user account."""

    __version__ = 1

    customer_id: Identifier(required=True)
    user_id: Identifier(required=True)
    name: String(required=True)
    registered_at: DateTime(required=True)


@ordering.event(part_of="Customer")
class CustomerProfileUpdated:
    __version__ = 1

    customer_id: Identifier(required=True)
    name: String()
    phone: String()
    birthday: Date()
    gender: String()


@ordering.event(part_of="Customer")
class CustomerAddressChanged:
    """The customer's postal address was replaced."""

    __version__ = 1

    customer_id: Identifier(required=True)
    full_address: String()
