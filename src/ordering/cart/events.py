"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its quantity increased by an add."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemQuantityChanged:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="Cart")
class CartsMerged:
    """A guest cart was folded into a signed-in user's cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    guest_id = String(required=True)
    items_merged_count = Integer(required=True)


@ordering.event(part_of="Cart")
class CartClaimed:
    """A guest cart became the user's cart because the user had none."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    guest_id = String(required=True)


@ordering.event(part_of="Cart")
class CartSynced:
    """Client-side cart state replaced the server cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_count = Integer(required=True)
    synced_at = DateTime(required=True)
