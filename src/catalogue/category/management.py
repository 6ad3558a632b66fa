"""Category management: commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()
    image_url: String(max_length=500)
    display_order: Integer(default=0)


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    image_url: String(max_length=500)
    display_order: Integer()


@catalogue.command(part_of="Category")
class DeactivateCategory:
    category_id: Identifier(required=True)


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        category = Category.create(
            name=command.name,
            slug=command.slug,
            description=command.description,
            image_url=command.image_url,
            display_order=command.display_order or 0,
        )

        if repo._dao.query.filter(slug=category.slug).all().items:
            raise ValidationError({"slug": [f"Category slug '{category.slug}' already exists"]})

        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.update_details(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
            display_order=command.display_order,
        )
        repo.add(category)

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.deactivate()
        repo.add(category)


def list_active_categories():
    categories = current_domain.repository_for(Category)._dao.query.filter(is_active=True).all().items
    return sorted(categories, key=lambda c: (c.display_order or 0, c.name))
