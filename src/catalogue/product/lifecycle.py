"""Product visibility, stock and removal: commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class PublishProduct:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class UnpublishProduct:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class MarkOutOfStock:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class MarkInStock:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageLifecycleHandler:
    @handle(PublishProduct)
    def publish_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.publish()
        repo.add(product)

    @handle(UnpublishProduct)
    def unpublish_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.unpublish()
        repo.add(product)

    @handle(MarkOutOfStock)
    def mark_out_of_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_stock_status(True)
        repo.add(product)

    @handle(MarkInStock)
    def mark_in_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_stock_status(False)
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.remove()
        repo.add(product)
