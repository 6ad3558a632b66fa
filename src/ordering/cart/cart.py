"""Cart aggregate: the items a customer or guest intends to buy.

A cart belongs to exactly one owner: a signed-in user (``user_id``) or an
anonymous browser session (``guest_id``). Carts hold product references and
quantities only; prices are resolved at checkout.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartClaimed,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartsMerged,
    CartSynced,
)
from ordering.domain import ordering

MAX_ITEM_QUANTITY = 99


def as_utc(value):
    """Treat naive timestamps as UTC so client and server times compare."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _check_quantity(quantity):
    if quantity > MAX_ITEM_QUANTITY:
        raise ValidationError({"quantity": [f"Quantity cannot exceed {MAX_ITEM_QUANTITY}"]})


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)
    added_at = DateTime()


@ordering.aggregate
class Cart:
    user_id = Identifier()
    guest_id = String(max_length=255)
    items = HasMany(CartItem)
    synced_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def cart_must_have_exactly_one_owner(self):
        if bool(self.user_id) == bool(self.guest_id):
            raise ValidationError({"owner": ["A cart belongs to either a user or a guest"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id=None, guest_id=None):
        now = datetime.now(UTC)
        return cls(user_id=user_id, guest_id=guest_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def snapshot(self):
        return [{"product_id": str(i.product_id), "quantity": i.quantity} for i in self.items]

    def _require_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity=1):
        """Add a product, or increase its quantity when it is already in the cart."""
        quantity = max(1, quantity or 1)
        now = datetime.now(UTC)

        existing = self.find_item(product_id)
        if existing:
            new_quantity = existing.quantity + quantity
            _check_quantity(new_quantity)
            existing.quantity = new_quantity
        else:
            new_quantity = quantity
            _check_quantity(new_quantity)
            self.add_items(CartItem(product_id=product_id, quantity=quantity, added_at=now))

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                new_quantity=new_quantity,
            )
        )

    def change_item_quantity(self, product_id, delta):
        """Step a quantity up or down. It never drops below 1."""
        item = self._require_item(product_id)
        self._set_quantity(item, max(1, item.quantity + delta))

    def set_item_quantity(self, product_id, quantity):
        """Overwrite a quantity, adding the product if it is missing."""
        quantity = max(1, quantity)
        _check_quantity(quantity)

        item = self.find_item(product_id)
        if item is None:
            self.add_item(product_id, quantity)
            return
        self._set_quantity(item, quantity)

    def _set_quantity(self, item, new_quantity):
        _check_quantity(new_quantity)
        previous_quantity = item.quantity
        if previous_quantity == new_quantity:
            return

        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                product_id=str(item.product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        item = self._require_item(product_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        for item in list(self.items):
            self.remove_item(item.product_id)

    # -------------------------------------------------------------------
    # Guest carts
    # -------------------------------------------------------------------
    def absorb(self, guest_cart):
        """Fold a guest cart's items into this cart, summing per product up to the cap."""
        now = datetime.now(UTC)
        for guest_item in guest_cart.items:
            existing = self.find_item(guest_item.product_id)
            if existing:
                existing.quantity = min(MAX_ITEM_QUANTITY, existing.quantity + guest_item.quantity)
            else:
                self.add_items(
                    CartItem(
                        product_id=guest_item.product_id,
                        quantity=min(MAX_ITEM_QUANTITY, guest_item.quantity),
                        added_at=now,
                    )
                )

        self.updated_at = now
        self.raise_(
            CartsMerged(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                guest_id=guest_cart.guest_id,
                items_merged_count=len(guest_cart.items),
            )
        )

    def claim(self, user_id):
        """Hand a guest cart over to a signed-in user."""
        guest_id = self.guest_id
        if not guest_id:
            raise ValidationError({"owner": ["Only guest carts can be claimed"]})

        with atomic_change(self):
            self.user_id = user_id
            self.guest_id = None
        self.updated_at = datetime.now(UTC)
        self.raise_(CartClaimed(cart_id=str(self.id), user_id=str(user_id), guest_id=guest_id))

    # -------------------------------------------------------------------
    # Client sync
    # -------------------------------------------------------------------
    def is_stale_against(self, client_timestamp):
        """True when a client snapshot taken at ``client_timestamp`` should win."""
        if self.synced_at is None:
            return True
        return as_utc(client_timestamp) > as_utc(self.synced_at)

    def replace_items(self, items, client_timestamp):
        """Last write wins: the client's items replace the server's wholesale."""
        for item in list(self.items):
            self.remove_items(item)

        merged = {}
        for entry in items:
            product_id = str(entry["product_id"])
            merged[product_id] = merged.get(product_id, 0) + int(entry["quantity"])

        now = datetime.now(UTC)
        for product_id, quantity in merged.items():
            if quantity < 1:
                continue
            self.add_items(
                CartItem(product_id=product_id, quantity=min(MAX_ITEM_QUANTITY, quantity), added_at=now)
            )

        self.synced_at = as_utc(client_timestamp)
        self.updated_at = now
        self.raise_(CartSynced(cart_id=str(self.id), item_count=self.item_count, synced_at=self.synced_at))
