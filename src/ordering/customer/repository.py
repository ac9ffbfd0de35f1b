"""Repositories for the User and Customer aggregates."""

from protean.exceptions import ObjectNotFoundError

from ordering.customer.customer import Customer
from ordering.customer.user import User
from ordering.domain import ordering


@ordering.repository(part_of=User)
class UserRepository:
    def find_by_id(self, user_id) -> User | None:
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            return None

    def find_all(self) -> list[User]:
        return self._dao.query.order_by("registered_at").all().items

    def find_by_username(self, username: str) -> User | None:
        return self._dao.query.filter(username=username).all().first

    def delete(self, user: User) -> None:
        self._dao.delete(user)


@ordering.repository(part_of=Customer)
class CustomerRepository:
    def find_by_id(self, customer_id) -> Customer | None:
        try:
            return self.get(customer_id)
        except ObjectNotFoundError:
            return None

    def find_all(self) -> list[Customer]:
        return self._dao.query.order_by("registered_at").all().items

    def find_by_user(self, user_id) -> Customer | None:
        """The customer profile owned by ``user_id``, if one exists."""
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def delete(self, customer: Customer) -> None:
        self._dao.delete(customer)
