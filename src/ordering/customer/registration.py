"""User and customer registration — commands and handlers."""

from datetime import date

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.customer.customer import Customer
from ordering.customer.user import User
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


def _remove_customer(customer) -> None:
    carts = current_domain.repository_for(Cart)
    cart = carts.find_by_customer(customer.id)
    if cart is not None:
        carts.delete(cart)

    current_domain.repository_for(Customer).delete(customer)
    logger.info("Customer removed", customer_id=str(customer.id), user_id=str(customer.user_id))


@ordering.command(part_of="User")
class RegisterUser:
    """Create a login account."""

    username: String(required=True, max_length=50)
    email: String(required=True, max_length=100)
    password: String(required=True, max_length=128)
    role: String(max_length=10)


@ordering.command(part_of="User")
class EnableUser:
    user_id: Identifier(required=True)


@ordering.command(part_of="User")
class DisableUser:
    user_id: Identifier(required=True)


@ordering.command(part_of="Customer")
class RegisterCustomer:
    """Attach a shopper profile to an existing user account."""

    user_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    phone: String(max_length=20)
    address: String(max_length=255)
    city: String(max_length=50)
    postal_code: String(max_length=20)
    country: String(max_length=50)
    birthday: String(max_length=10)
    gender: String(max_length=1)


@ordering.command(part_of="Customer")
class ChangeCustomerAddress:
    customer_id: Identifier(required=True)
    address: String(max_length=255)
    city: String(max_length=50)
    postal_code: String(max_length=20)
    country: String(max_length=50)


@ordering.command(part_of="Customer")
class UpdateCustomerProfile:
    """Change profile details. Fields left out keep their current value."""

    customer_id: Identifier(required=True)
    name: String(max_length=100)
    phone: String(max_length=20)
    birthday: String(max_length=10)
    gender: String(max_length=1)


@ordering.command(part_of="Customer")
class RemoveCustomer:
    customer_id: Identifier(required=True)


@ordering.command(part_of="User")
class RemoveUser:
    """Delete an account together with its customer profile and open cart."""

    user_id: Identifier(required=True)


@ordering.command_handler(part_of=User)
class ManageUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_username(command.username) is not None:
            raise ValidationError({"username": [f"Username {command.username!r} is already taken"]})

        user = User.register(
            username=command.username,
            email=command.email,
            password=command.password,
            role=command.role,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), username=user.username)
        return str(user.id)

    @handle(EnableUser)
    def enable_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.enable()
        repo.add(user)

    @handle(DisableUser)
    def disable_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.disable()
        repo.add(user)

    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        customer = current_domain.repository_for(Customer).find_by_user(user.id)
        if customer is not None:
            _remove_customer(customer)

        repo.delete(user)
        logger.info("User removed", user_id=str(user.id), username=user.username)


@ordering.command_handler(part_of=Customer)
class ManageCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        # Raises ObjectNotFoundError for an unknown user
        current_domain.repository_for(User).get(command.user_id)

        repo = current_domain.repository_for(Customer)
        if repo.find_by_user(command.user_id) is not None:
            raise ValidationError({"user_id": ["User already has a customer profile"]})

        birthday = None
        if command.birthday:
            birthday = date.fromisoformat(command.birthday)

        customer = Customer.register(
            user_id=command.user_id,
            name=command.name,
            phone=command.phone,
            birthday=birthday,
            gender=command.gender,
            address=command.address,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        repo.add(customer)
        logger.info("Customer registered", customer_id=str(customer.id), user_id=str(command.user_id))
        return str(customer.id)

    @handle(ChangeCustomerAddress)
    def change_customer_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.change_address(
            address=command.address,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        repo.add(customer)

    @handle(UpdateCustomerProfile)
    def update_customer_profile(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        changes = {
            field: getattr(command, field)
            for field in ("name", "phone", "gender")
            if getattr(command, field) is not None
        }
        if command.birthday:
            changes["birthday"] = date.fromisoformat(command.birthday)

        customer.update_profile(**changes)
        repo.add(customer)

    @handle(RemoveCustomer)
    def remove_customer(self, command):
        customer = current_domain.repository_for(Customer).get(command.customer_id)
        _remove_customer(customer)
