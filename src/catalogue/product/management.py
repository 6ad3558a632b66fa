"""Product management: create, edit and reprice."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.01)
    slug: String(max_length=200)
    compare_at_price: Float(min_value=0.0)
    description: Text()
    image_url: String(max_length=500)
    category_slug: String(max_length=200)
    brand: String(max_length=100)
    size: String(max_length=50)
    details: Text()
    is_published: Boolean(default=False)


@catalogue.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    slug: String(max_length=200)
    description: Text()
    image_url: String(max_length=500)
    category_slug: String(max_length=200)
    brand: String(max_length=100)
    size: String(max_length=50)
    details: Text()


@catalogue.command(part_of="Product")
class ChangeProductPrice:
    product_id: Identifier(required=True)
    price: Float(required=True, min_value=0.01)
    compare_at_price: Float(min_value=0.0)


def _ensure_slug_available(slug, product_id=None):
    taken = current_domain.repository_for(Product)._dao.query.filter(slug=slug).all().items
    if any(str(p.id) != str(product_id) for p in taken):
        raise ValidationError({"slug": [f"Slug '{slug}' is already used by another product"]})


def _ensure_category_exists(category_slug):
    if not category_slug:
        return
    categories = current_domain.repository_for(Category)._dao.query.filter(slug=category_slug).all().items
    if not categories or not categories[0].is_active:
        raise ValidationError({"category_slug": [f"Unknown or inactive category '{category_slug}'"]})


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _ensure_category_exists(command.category_slug)

        product = Product.create(
            name=command.name,
            price=command.price,
            slug=command.slug,
            compare_at_price=command.compare_at_price,
            description=command.description,
            image_url=command.image_url,
            category_slug=command.category_slug,
            brand=command.brand,
            size=command.size,
            details=command.details,
            is_published=command.is_published,
        )
        _ensure_slug_available(product.slug)
        current_domain.repository_for(Product).add(product)

        logger.info("Product created", product_id=str(product.id), slug=product.slug)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.slug:
            _ensure_slug_available(command.slug, product_id=product.id)
        if command.category_slug:
            _ensure_category_exists(command.category_slug)

        product.update_details(
            name=command.name,
            slug=command.slug,
            description=command.description,
            image_url=command.image_url,
            category_slug=command.category_slug,
            brand=command.brand,
            size=command.size,
            details=command.details,
        )
        repo.add(product)

    @handle(ChangeProductPrice)
    def change_product_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(command.price, compare_at_price=command.compare_at_price)
        repo.add(product)
