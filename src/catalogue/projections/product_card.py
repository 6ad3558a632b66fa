"""Product card: the storefront listing projection, plus browse and best-seller queries."""

import math
from datetime import datetime

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.events import (
    ProductCreated,
    ProductDetailsUpdated,
    ProductPriceChanged,
    ProductPublished,
    ProductRatingRecorded,
    ProductRemoved,
    ProductSaleRecorded,
    ProductStockChanged,
    ProductUnpublished,
)
from catalogue.product.product import Product

DEFAULT_PAGE_SIZE = 8
DEFAULT_BEST_SELLERS_LIMIT = 12

SORT_PRICE_ASC = "priceAsc"
SORT_PRICE_DESC = "priceDesc"
SORT_MOST_SALE = "mostSale"
SORT_NEWEST = "newest"


@catalogue.projection
class ProductCard:
    product_id: Identifier(identifier=True, required=True)
    name: String(required=True)
    slug: String(required=True)
    price: Float(required=True)
    compare_at_price: Float()
    image_url: String()
    category_slug: String()
    brand: String()
    size: String()
    is_published: Boolean(default=False)
    out_of_stock: Boolean(default=False)
    rating_average: Float(default=0.0)
    rating_count: Integer(default=0)
    sales_count: Integer(default=0)
    created_at: DateTime()


@catalogue.projector(projector_for=ProductCard, aggregates=[Product])
class ProductCardProjector:
    @on(ProductCreated)
    def on_product_created(self, event):
        current_domain.repository_for(ProductCard).add(
            ProductCard(
                product_id=event.product_id,
                name=event.name,
                slug=event.slug,
                price=event.price,
                compare_at_price=event.compare_at_price,
                image_url=event.image_url,
                category_slug=event.category_slug,
                brand=event.brand,
                size=event.size,
                is_published=event.is_published,
                created_at=event.created_at,
            )
        )

    @on(ProductDetailsUpdated)
    def on_details_updated(self, event):
        self._update(
            event.product_id,
            name=event.name,
            slug=event.slug,
            image_url=event.image_url,
            category_slug=event.category_slug,
            brand=event.brand,
            size=event.size,
        )

    @on(ProductPriceChanged)
    def on_price_changed(self, event):
        self._update(event.product_id, price=event.price, compare_at_price=event.compare_at_price)

    @on(ProductPublished)
    def on_published(self, event):
        self._update(event.product_id, is_published=True)

    @on(ProductUnpublished)
    def on_unpublished(self, event):
        self._update(event.product_id, is_published=False)

    @on(ProductStockChanged)
    def on_stock_changed(self, event):
        self._update(event.product_id, out_of_stock=event.out_of_stock)

    @on(ProductSaleRecorded)
    def on_sale_recorded(self, event):
        self._update(event.product_id, sales_count=event.sales_count)

    @on(ProductRatingRecorded)
    def on_rating_recorded(self, event):
        self._update(event.product_id, rating_average=event.rating_average, rating_count=event.rating_count)

    @on(ProductRemoved)
    def on_removed(self, event):
        repo = current_domain.repository_for(ProductCard)
        try:
            card = repo.get(event.product_id)
        except ObjectNotFoundError:
            return
        repo._dao.delete(card)

    def _update(self, product_id, **values):
        repo = current_domain.repository_for(ProductCard)
        try:
            card = repo.get(product_id)
        except ObjectNotFoundError:
            return
        for field, value in values.items():
            setattr(card, field, value)
        repo.add(card)


def _published_cards():
    return current_domain.repository_for(ProductCard)._dao.query.filter(is_published=True).all().items


def browse_products(
    search=None,
    category_slug=None,
    price_min=None,
    price_max=None,
    sort_by=None,
    page=1,
    page_size=DEFAULT_PAGE_SIZE,
):
    """One page of published products matching the storefront filters.

    ``search`` matches anywhere in the name, case-insensitively. Price bounds
    are inclusive. Unknown ``sort_by`` values fall back to newest first.
    """
    page = max(1, page or 1)
    page_size = max(1, page_size or DEFAULT_PAGE_SIZE)

    cards = _published_cards()
    if search and search.strip():
        needle = search.strip().lower()
        cards = [c for c in cards if needle in c.name.lower()]
    if category_slug:
        cards = [c for c in cards if c.category_slug == category_slug]
    if price_min is not None:
        cards = [c for c in cards if c.price >= price_min]
    if price_max is not None:
        cards = [c for c in cards if c.price <= price_max]

    if sort_by == SORT_PRICE_ASC:
        cards.sort(key=lambda c: c.price)
    elif sort_by == SORT_PRICE_DESC:
        cards.sort(key=lambda c: c.price, reverse=True)
    elif sort_by == SORT_MOST_SALE:
        cards.sort(key=lambda c: c.sales_count or 0, reverse=True)
    else:
        cards.sort(key=lambda c: c.created_at or datetime.min, reverse=True)

    total = len(cards)
    start = (page - 1) * page_size
    return {
        "products": cards[start : start + page_size],
        "total": total,
        "total_pages": math.ceil(total / page_size),
        "current_page": page,
    }


def best_sellers(page=1, limit=DEFAULT_BEST_SELLERS_LIMIT):
    """Published products that have sold at least one unit, best selling first."""
    page = max(1, page or 1)
    limit = max(1, limit or DEFAULT_BEST_SELLERS_LIMIT)

    sold = sorted(
        (c for c in _published_cards() if (c.sales_count or 0) > 0),
        key=lambda c: c.sales_count,
        reverse=True,
    )
    start = (page - 1) * limit
    return {"products": sold[start : start + limit], "total": len(sold)}
