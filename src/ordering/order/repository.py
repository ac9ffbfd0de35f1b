"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_all(self) -> list[Order]:
        return self._dao.query.order_by("-created_at").all().items

    def find_by_order_no(self, order_no: str) -> Order | None:
        return self._dao.query.filter(order_no=order_no).all().first

    def find_by_customer(self, customer_id) -> list[Order]:
        """A customer's orders, newest first."""
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").all().items

    def find_by_status(self, status: str) -> list[Order]:
        return self._dao.query.filter(status=status).order_by("-created_at").all().items
