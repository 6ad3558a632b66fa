"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.product.events import (
    ProductCreated,
    ProductPriceChanged,
    ProductPublished,
    ProductRatingRecorded,
    ProductRemoved,
    ProductSaleRecorded,
    ProductStockChanged,
    ProductUnpublished,
)
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_PRODUCT_EVENT_CLASSES = {
    "ProductCreated": ProductCreated,
    "ProductPriceChanged": ProductPriceChanged,
    "ProductPublished": ProductPublished,
    "ProductUnpublished": ProductUnpublished,
    "ProductStockChanged": ProductStockChanged,
    "ProductRemoved": ProductRemoved,
    "ProductSaleRecorded": ProductSaleRecorded,
    "ProductRatingRecorded": ProductRatingRecorded,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a draft product priced at {price:f}"), target_fixture="product")
def draft_product(price):
    product = Product.create(name="Spring Water 330ml", price=price)
    product._events.clear()
    return product


@given("a published product", target_fixture="product")
def published_product():
    product = Product.create(name="Spring Water 330ml", price=18.5, is_published=True)
    product._events.clear()
    return product


@given("a removed product", target_fixture="product")
def removed_product():
    product = Product.create(name="Spring Water 330ml", price=18.5, is_published=True)
    product.remove()
    product._events.clear()
    return product


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} product event is raised"))
def product_event_raised(product, event_type):
    event_cls = _PRODUCT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"


@then("no product event is raised")
def no_product_event(product):
    assert product._events == []
