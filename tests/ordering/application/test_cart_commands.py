import json
from datetime import UTC, datetime, timedelta

import pytest
from ordering.cart.cart import Cart
from ordering.cart.items import (
    AddToCart,
    ClearCart,
    RemoveFromCart,
    SetCartItemQuantity,
    UpdateCartItemQuantity,
    cart_count,
    find_cart,
)
from ordering.cart.management import MergeGuestCart, SyncCart
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain


def _add(quantity=1, product_id="prod-1", **owner):
    owner = owner or {"user_id": "user-1"}
    return current_domain.process(AddToCart(product_id=product_id, quantity=quantity, **owner), asynchronous=False)


class TestCartItems:
    def test_first_add_creates_cart(self):
        assert find_cart(user_id="user-1") is None
        assert _add(2) == 2
        assert find_cart(user_id="user-1") is not None
        assert cart_count(user_id="user-1") == 2

    def test_guest_cart(self):
        _add(3, guest_id="guest-abc")
        assert cart_count(guest_id="guest-abc") == 3
        assert cart_count(user_id="user-1") == 0

    def test_owner_is_required(self):
        with pytest.raises(ValidationError):
            find_cart()

    def test_change_quantity(self):
        _add(3)
        count = current_domain.process(
            UpdateCartItemQuantity(user_id="user-1", product_id="prod-1", delta=-5), asynchronous=False
        )
        assert count == 1

    def test_change_quantity_without_cart(self):
        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateCartItemQuantity(user_id="user-1", product_id="prod-1", delta=1), asynchronous=False
            )

    def test_set_quantity(self):
        _add(3)
        count = current_domain.process(
            SetCartItemQuantity(user_id="user-1", product_id="prod-1", quantity=8), asynchronous=False
        )
        assert count == 8

    def test_removing_last_item_deletes_cart(self):
        _add(2, product_id="prod-1")
        _add(1, product_id="prod-2")

        assert current_domain.process(RemoveFromCart(user_id="user-1", product_id="prod-1"), asynchronous=False) == 1
        assert current_domain.process(RemoveFromCart(user_id="user-1", product_id="prod-2"), asynchronous=False) == 0
        assert find_cart(user_id="user-1") is None

    def test_clear_cart(self):
        _add(2)
        current_domain.process(ClearCart(user_id="user-1"), asynchronous=False)
        assert find_cart(user_id="user-1") is None


class TestMergeGuestCart:
    def _merge(self):
        return current_domain.process(MergeGuestCart(guest_id="guest-abc", user_id="user-1"), asynchronous=False)

    def test_guest_cart_is_claimed_when_user_has_none(self):
        _add(2, guest_id="guest-abc")
        items = self._merge()

        assert items == [{"product_id": "prod-1", "quantity": 2}]
        assert find_cart(guest_id="guest-abc") is None
        assert cart_count(user_id="user-1") == 2

    def test_quantities_are_summed_and_guest_cart_deleted(self):
        _add(2)
        _add(3, guest_id="guest-abc")
        _add(1, product_id="prod-2", guest_id="guest-abc")

        items = self._merge()

        assert {i["product_id"]: i["quantity"] for i in items} == {"prod-1": 5, "prod-2": 1}
        assert find_cart(guest_id="guest-abc") is None
        assert len(current_domain.repository_for(Cart)._dao.query.all().items) == 1

    def test_merge_is_capped(self):
        _add(90)
        _add(20, guest_id="guest-abc")
        items = self._merge()
        assert items == [{"product_id": "prod-1", "quantity": 99}]

    def test_nothing_to_merge(self):
        _add(2)
        assert self._merge() == [{"product_id": "prod-1", "quantity": 2}]


class TestSyncCart:
    def _sync(self, items, client_timestamp):
        return current_domain.process(
            SyncCart(user_id="user-1", items=json.dumps(items), client_timestamp=client_timestamp),
            asynchronous=False,
        )

    def test_sync_creates_cart(self):
        items = self._sync([{"product_id": "prod-1", "quantity": 4}], datetime.now(UTC))
        assert items == [{"product_id": "prod-1", "quantity": 4}]
        assert cart_count(user_id="user-1") == 4

    def test_newer_client_replaces_server_items(self):
        first = datetime.now(UTC)
        self._sync([{"product_id": "prod-1", "quantity": 4}], first)
        items = self._sync([{"product_id": "prod-2", "quantity": 1}], first + timedelta(minutes=1))
        assert items == [{"product_id": "prod-2", "quantity": 1}]

    def test_stale_client_is_ignored(self):
        first = datetime.now(UTC)
        self._sync([{"product_id": "prod-1", "quantity": 4}], first)
        items = self._sync([{"product_id": "prod-2", "quantity": 1}], first - timedelta(minutes=1))
        assert items == [{"product_id": "prod-1", "quantity": 4}]

    def test_empty_sync_keeps_an_empty_cart(self):
        first = datetime.now(UTC)
        self._sync([{"product_id": "prod-1", "quantity": 4}], first)
        assert self._sync([], first + timedelta(minutes=1)) == []

        cart = find_cart(user_id="user-1")
        assert cart.items == []
        assert cart_count(user_id="user-1") == 0

    def test_older_sync_after_emptying_is_ignored(self):
        first = datetime.now(UTC)
        self._sync([{"product_id": "prod-1", "quantity": 4}], first)
        self._sync([], first + timedelta(minutes=5))

        items = self._sync([{"product_id": "prod-9", "quantity": 7}], first + timedelta(minutes=1))
        assert items == []
        assert cart_count(user_id="user-1") == 0

    def test_older_sync_after_clearing_is_ignored(self):
        first = datetime.now(UTC)
        self._sync([{"product_id": "prod-1", "quantity": 4}], first)
        current_domain.process(ClearCart(user_id="user-1"), asynchronous=False)

        assert self._sync([{"product_id": "prod-2", "quantity": 1}], first - timedelta(minutes=1)) == []

    def test_cart_can_be_refilled_after_empty_sync(self):
        first = datetime.now(UTC)
        self._sync([{"product_id": "prod-1", "quantity": 4}], first)
        self._sync([], first + timedelta(minutes=1))

        assert _add(3) == 3
        assert cart_count(user_id="user-1") == 3
