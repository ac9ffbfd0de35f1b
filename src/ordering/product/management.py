"""Product catalogue management — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.product.product import Product

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=50)
    product_type: String(required=True, max_length=100)
    unit_price: String(required=True, max_length=32)
    description: Text()
    image_url: String(max_length=500)


@ordering.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=50)
    product_type: String(max_length=100)
    description: Text()
    image_url: String(max_length=500)


@ordering.command(part_of="Product")
class ChangeProductPrice:
    product_id: Identifier(required=True)
    new_price: String(required=True, max_length=32)


@ordering.command(part_of="Product")
class ActivateProduct:
    product_id: Identifier(required=True)


@ordering.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@ordering.command(part_of="Product")
class MarkProductOutOfStock:
    product_id: Identifier(required=True)


@ordering.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@ordering.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            product_type=command.product_type,
            unit_price=command.unit_price,
            description=command.description,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), unit_price=product.unit_price)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            product_type=command.product_type,
            description=command.description,
            image_url=command.image_url,
        )
        repo.add(product)

    @handle(ChangeProductPrice)
    def change_product_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        outcome = product.change_price(command.new_price)
        if not outcome:
            logger.warning(
                "Product price change ignored",
                product_id=str(product.id),
                new_price=command.new_price,
                reason=outcome.reason,
            )
            return
        repo.add(product)

    @handle(ActivateProduct)
    def activate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.activate()
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)

    @handle(MarkProductOutOfStock)
    def mark_product_out_of_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.mark_as_out_of_stock()
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_by_id(command.product_id)
        if product is None:
            return
        repo.delete(product)
        logger.info("Product removed", product_id=str(command.product_id))
