import pytest
from catalogue.product.events import (
    ProductCreated,
    ProductPriceChanged,
    ProductPublished,
    ProductRatingRecorded,
    ProductRemoved,
    ProductSaleRecorded,
    ProductStockChanged,
)
from catalogue.product.product import Product
from protean.exceptions import ValidationError


def _product(**overrides):
    defaults = {"name": "Spring Water 330ml", "price": 18.5}
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_slug_is_derived_from_name(self):
        product = _product()
        assert product.slug == "spring-water-330ml"

    def test_non_latin_name_gets_generated_slug(self):
        product = _product(name="مياه نقية")
        assert product.slug.startswith("product-")

    def test_created_unpublished_by_default(self):
        product = _product()
        assert product.is_published is False
        assert product.sales_count == 0

    def test_raises_product_created(self):
        product = _product(brand="Nova", size="330ml")
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.brand == "Nova"
        assert event.size == "330ml"

    def test_compare_at_price_below_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _product(price=20.0, compare_at_price=15.0)
        assert "compare_at_price" in exc.value.messages

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _product(price=0)

    def test_explicit_slug_must_be_url_safe(self):
        with pytest.raises(ValidationError):
            _product(slug="Not A Slug")


class TestPricing:
    def test_price_rise_with_stale_compare_at_price(self):
        product = _product(price=10.0, compare_at_price=12.0)
        product.change_price(15.0)

        assert product.price == 15.0
        assert product.compare_at_price is None
        event = product._events[-1]
        assert isinstance(event, ProductPriceChanged)
        assert event.previous_price == 10.0

    def test_new_compare_at_price_is_kept(self):
        product = _product(price=10.0)
        product.change_price(8.0, compare_at_price=10.0)
        assert product.compare_at_price == 10.0


class TestVisibility:
    def test_publish(self):
        product = _product()
        product.publish()
        assert product.is_published is True
        assert isinstance(product._events[-1], ProductPublished)

    def test_publish_twice_fails(self):
        product = _product(is_published=True)
        with pytest.raises(ValidationError):
            product.publish()

    def test_unpublish_requires_published(self):
        with pytest.raises(ValidationError):
            _product().unpublish()

    def test_stock_toggle(self):
        product = _product()
        product.set_stock_status(True)
        assert product.out_of_stock is True
        assert product._events[-1].out_of_stock is True
        assert isinstance(product._events[-1], ProductStockChanged)

    def test_stock_status_unchanged_fails(self):
        with pytest.raises(ValidationError):
            _product().set_stock_status(False)

    def test_remove_unpublishes(self):
        product = _product(is_published=True)
        product.remove()
        assert product.is_removed is True
        assert product.is_published is False
        assert isinstance(product._events[-1], ProductRemoved)

    def test_removed_product_cannot_be_edited(self):
        product = _product()
        product.remove()
        with pytest.raises(ValidationError):
            product.update_details(name="Other")
        with pytest.raises(ValidationError):
            product.publish()


class TestSalesAndRatings:
    def test_sales_accumulate(self):
        product = _product()
        product.record_sale(2)
        product.record_sale(3)
        assert product.sales_count == 5
        event = product._events[-1]
        assert isinstance(event, ProductSaleRecorded)
        assert event.sales_count == 5

    def test_sale_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            _product().record_sale(0)

    def test_rating_average(self):
        product = _product()
        for rating in (5, 4, 4):
            product.record_rating(rating)
        assert product.rating_count == 3
        assert product.rating_average == 4.33
        assert isinstance(product._events[-1], ProductRatingRecorded)

    def test_rating_out_of_range(self):
        with pytest.raises(ValidationError):
            _product().record_rating(6)
