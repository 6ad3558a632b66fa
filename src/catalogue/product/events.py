"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue (unpublished unless stated)."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    price: Float(required=True)
    compare_at_price: Float()
    image_url: String()
    category_slug: String()
    brand: String()
    size: String()
    is_published: Boolean(default=False)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    image_url: String()
    category_slug: String()
    brand: String()
    size: String()


@catalogue.event(part_of="Product")
class ProductPriceChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    price: Float(required=True)
    compare_at_price: Float()


@catalogue.event(part_of="Product")
class ProductPublished:
    __version__ = 1

    product_id: Identifier(required=True)
    published_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUnpublished:
    __version__ = 1

    product_id: Identifier(required=True)
    unpublished_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductStockChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    out_of_stock: Boolean(required=True)


@catalogue.event(part_of="Product")
class ProductRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    removed_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductSaleRecorded:
    """Units of the product were ordered at checkout."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    sales_count: Integer(required=True)


@catalogue.event(part_of="Product")
class ProductRatingRecorded:
    __version__ = 1

    product_id: Identifier(required=True)
    rating: Integer(required=True)
    rating_average: Float(required=True)
    rating_count: Integer(required=True)
