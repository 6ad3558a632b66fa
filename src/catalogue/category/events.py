"""Domain events for the Category aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@catalogue.event(part_of="Category")
class CategoryDetailsUpdated:
    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    display_order: Integer()


@catalogue.event(part_of="Category")
class CategoryDeactivated:
    __version__ = 1

    category_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
