"""Category aggregate root for grouping products on the storefront."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.shared.slug import slugify, validate_slug


@catalogue.aggregate
class Category:
    """A storefront section such as "Water" or "Coolers", addressed by its slug."""

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    description: Text()
    image_url: String(max_length=500)
    is_active: Boolean(default=True)
    display_order: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug:
            validate_slug(self.slug)

    @classmethod
    def create(cls, name, slug=None, description=None, image_url=None, display_order=0):
        from catalogue.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            slug=slug or slugify(name, fallback_prefix="category"),
            description=description,
            image_url=image_url,
            display_order=display_order,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                slug=category.slug,
            )
        )
        return category

    def update_details(self, name=None, description=None, image_url=None, display_order=None):
        from catalogue.category.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        if display_order is not None:
            self.display_order = display_order
        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                display_order=self.display_order,
            )
        )

    def deactivate(self):
        from catalogue.category.events import CategoryDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Category is already inactive"]})

        now = datetime.now()
        self.is_active = False
        self.updated_at = now
        self.raise_(CategoryDeactivated(category_id=self.id, deactivated_at=now))
