"""Checkout pricing: unit prices from the catalogue copy, then totals."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.projections.product_price import ProductPrice


def price_cart_items(cart_items):
    """Snapshot each cart line with the product's current name and price.

    Raises ValidationError listing every line that can no longer be bought.
    """
    repo = current_domain.repository_for(ProductPrice)
    lines, problems = [], []

    for item in cart_items:
        try:
            product = repo.get(str(item.product_id))
        except ObjectNotFoundError:
            problems.append(f"Product {item.product_id} is not available")
            continue

        if not product.is_purchasable:
            problems.append(f"{product.name} is not available")
            continue

        lines.append(
            {
                "product_id": str(item.product_id),
                "name": product.name,
                "quantity": item.quantity,
                "unit_price": product.price,
            }
        )

    if problems:
        raise ValidationError({"items": problems})
    return lines


def compute_totals(lines, settings):
    """Subtotal, delivery fee, tax and total for priced lines.

    Delivery is free once the subtotal reaches the platform minimum. Tax is
    charged on the subtotal only.
    """
    subtotal = sum(line["unit_price"] * line["quantity"] for line in lines)
    delivery_fee = 0.0 if subtotal >= settings.min_order_for_free_shipping else settings.shipping_fee
    tax = subtotal * settings.tax_percentage / 100
    total = subtotal + delivery_fee + tax

    return {
        "subtotal": round(subtotal, 2),
        "delivery_fee": round(delivery_fee, 2),
        "tax": round(tax, 2),
        "total": round(total, 2),
        "currency": settings.currency,
    }
