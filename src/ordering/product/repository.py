"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from ordering.domain import ordering
from ordering.product.product import Product


@ordering.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product | None:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            return None

    def find_all(self) -> list[Product]:
        """All products in listing order."""
        return self._dao.query.order_by("created_at").all().items

    def find_by_status(self, status: str) -> list[Product]:
        return self._dao.query.filter(status=status).order_by("created_at").all().items

    def find_many(self, product_ids) -> dict:
        """Products for the given ids, keyed by id. Unknown ids are left out."""
        products = {}
        for product_id in {str(pid) for pid in product_ids}:
            product = self.find_by_id(product_id)
            if product is not None:
                products[product_id] = product
        return products

    def delete(self, product: Product) -> None:
        self._dao.delete(product)
