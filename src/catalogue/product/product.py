"""Product aggregate root.

A product is created unpublished, becomes visible on the storefront once
published, and keeps running totals of units sold and customer ratings that
power the "most sold" sort, best sellers and star ratings.
"""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.shared.slug import slugify, validate_slug


@catalogue.aggregate
class Product:
    name: String(required=True, max_length=200)
    slug: String(required=True, max_length=200)
    description: Text()
    price: Float(required=True, min_value=0.01)
    compare_at_price: Float(min_value=0.0)
    image_url: String(max_length=500)
    category_slug: String(max_length=200)
    brand: String(max_length=100)
    size: String(max_length=50)
    details: Text()
    is_published: Boolean(default=False)
    out_of_stock: Boolean(default=False)
    is_removed: Boolean(default=False)
    rating_average: Float(default=0.0)
    rating_count: Integer(default=0)
    rating_total: Integer(default=0)
    sales_count: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def compare_at_price_cannot_be_below_price(self):
        if self.compare_at_price is not None and self.price is not None and self.compare_at_price < self.price:
            raise ValidationError({"compare_at_price": ["Compare-at price must be at least the selling price"]})

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug:
            validate_slug(self.slug)

    @invariant.post
    def removed_products_are_never_published(self):
        if self.is_removed and self.is_published:
            raise ValidationError({"is_published": ["A removed product cannot be published"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        slug=None,
        compare_at_price=None,
        description=None,
        image_url=None,
        category_slug=None,
        brand=None,
        size=None,
        details=None,
        is_published=False,
    ):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            slug=slug or slugify(name, fallback_prefix="product"),
            price=price,
            compare_at_price=compare_at_price,
            description=description,
            image_url=image_url,
            category_slug=category_slug,
            brand=brand,
            size=size,
            details=details,
            is_published=is_published,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                slug=product.slug,
                price=product.price,
                compare_at_price=product.compare_at_price,
                image_url=product.image_url,
                category_slug=product.category_slug,
                brand=product.brand,
                size=product.size,
                is_published=product.is_published,
                created_at=now,
            )
        )
        return product

    def _ensure_not_removed(self):
        if self.is_removed:
            raise ValidationError({"product": ["Product has been removed"]})

    def update_details(self, **changes):
        """Apply a partial update of descriptive fields. None values are ignored."""
        from catalogue.product.events import ProductDetailsUpdated

        self._ensure_not_removed()
        for field in ("name", "slug", "description", "image_url", "category_slug", "brand", "size", "details"):
            value = changes.get(field)
            if value is not None:
                setattr(self, field, value)
        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                image_url=self.image_url,
                category_slug=self.category_slug,
                brand=self.brand,
                size=self.size,
            )
        )

    def change_price(self, price, compare_at_price=None):
        from catalogue.product.events import ProductPriceChanged

        self._ensure_not_removed()
        previous_price = self.price
        # Clear the old compare-at price first so a price rise does not trip the invariant
        self.compare_at_price = None
        self.price = price
        self.compare_at_price = compare_at_price
        self.updated_at = datetime.now()

        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                previous_price=previous_price,
                price=price,
                compare_at_price=compare_at_price,
            )
        )

    def publish(self):
        from catalogue.product.events import ProductPublished

        self._ensure_not_removed()
        if self.is_published:
            raise ValidationError({"is_published": ["Product is already published"]})

        now = datetime.now()
        self.is_published = True
        self.updated_at = now
        self.raise_(ProductPublished(product_id=self.id, published_at=now))

    def unpublish(self):
        from catalogue.product.events import ProductUnpublished

        if not self.is_published:
            raise ValidationError({"is_published": ["Product is not published"]})

        now = datetime.now()
        self.is_published = False
        self.updated_at = now
        self.raise_(ProductUnpublished(product_id=self.id, unpublished_at=now))

    def set_stock_status(self, out_of_stock):
        from catalogue.product.events import ProductStockChanged

        self._ensure_not_removed()
        if self.out_of_stock == out_of_stock:
            state = "out of stock" if out_of_stock else "in stock"
            raise ValidationError({"out_of_stock": [f"Product is already {state}"]})

        self.out_of_stock = out_of_stock
        self.updated_at = datetime.now()
        self.raise_(ProductStockChanged(product_id=self.id, out_of_stock=out_of_stock))

    def remove(self):
        from catalogue.product.events import ProductRemoved

        self._ensure_not_removed()
        now = datetime.now()
        self.is_published = False
        self.is_removed = True
        self.updated_at = now
        self.raise_(ProductRemoved(product_id=self.id, removed_at=now))

    def record_sale(self, quantity):
        from catalogue.product.events import ProductSaleRecorded

        if quantity < 1:
            raise ValidationError({"quantity": ["Sold quantity must be positive"]})

        self.sales_count = (self.sales_count or 0) + quantity
        self.raise_(
            ProductSaleRecorded(
                product_id=self.id,
                quantity=quantity,
                sales_count=self.sales_count,
            )
        )

    def record_rating(self, rating):
        from catalogue.product.events import ProductRatingRecorded

        if not 1 <= rating <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

        self.rating_total = (self.rating_total or 0) + rating
        self.rating_count = (self.rating_count or 0) + 1
        self.rating_average = round(self.rating_total / self.rating_count, 2)

        self.raise_(
            ProductRatingRecorded(
                product_id=self.id,
                rating=rating,
                rating_average=self.rating_average,
                rating_count=self.rating_count,
            )
        )
