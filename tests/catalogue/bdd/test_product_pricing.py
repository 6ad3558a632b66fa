"""BDD tests for product pricing and ratings."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/product_pricing.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse("the price is changed to {price:f} with a compare-at price of {compare_at:f}"))
def change_price_with_compare_at(product, price, compare_at, error):
    try:
        product.change_price(price, compare_at_price=compare_at)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the price is changed to {price:f}"))
def change_price(product, price):
    product.change_price(price)


@when(parsers.cfparse("customers rate the product {first:d}, {second:d} and {third:d}"))
def rate_product(product, first, second, third):
    for rating in (first, second, third):
        product.record_rating(rating)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the product price is {price:f}"))
def product_price_is(product, price):
    assert product.price == price


@then(parsers.cfparse("the compare-at price is {compare_at:f}"))
def compare_at_price_is(product, compare_at):
    assert product.compare_at_price == compare_at


@then("there is no compare-at price")
def no_compare_at_price(product):
    assert product.compare_at_price is None


@then(parsers.cfparse("the product has {count:d} ratings averaging {average:f}"))
def product_rating_is(product, count, average):
    assert product.rating_count == count
    assert product.rating_average == average
