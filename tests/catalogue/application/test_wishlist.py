from datetime import datetime, timedelta

import pytest
from catalogue.product.lifecycle import MarkOutOfStock, RemoveProduct
from catalogue.wishlist.wishlist import (
    AddToWishlist,
    RemoveFromWishlist,
    WishlistItem,
    is_in_wishlist,
    wishlist_count,
    wishlist_products,
)
from protean import current_domain
from protean.exceptions import ValidationError


def _add(product_id, user_id="user-1"):
    return current_domain.process(AddToWishlist(user_id=user_id, product_id=product_id), asynchronous=False)


def _remove(product_id, user_id="user-1"):
    return current_domain.process(RemoveFromWishlist(user_id=user_id, product_id=product_id), asynchronous=False)


class TestAddToWishlist:
    def test_add_returns_count(self, create_product):
        first = create_product(name="Spring Water")
        second = create_product(name="Sparkling Water")

        assert _add(first) == 1
        assert _add(second) == 2
        assert is_in_wishlist("user-1", first) is True
        assert wishlist_count("user-1") == 2

    def test_wishlists_are_per_user(self, create_product):
        product_id = create_product()
        _add(product_id)
        assert is_in_wishlist("user-2", product_id) is False
        assert wishlist_count("user-2") == 0

    def test_duplicate_is_rejected(self, create_product):
        product_id = create_product()
        _add(product_id)
        with pytest.raises(ValidationError) as exc:
            _add(product_id)
        assert "product_id" in exc.value.messages
        assert wishlist_count("user-1") == 1

    def test_unknown_product_is_rejected(self):
        with pytest.raises(ValidationError):
            _add("missing")

    def test_removed_product_is_rejected(self, create_product):
        product_id = create_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ValidationError):
            _add(product_id)


class TestRemoveFromWishlist:
    def test_remove(self, create_product):
        product_id = create_product()
        _add(product_id)
        assert _remove(product_id) == 0
        assert is_in_wishlist("user-1", product_id) is False

    def test_remove_missing(self, create_product):
        with pytest.raises(ValidationError):
            _remove(create_product())


class TestWishlistProducts:
    def test_newest_first_with_card_details(self, create_product):
        older = create_product(name="Spring Water")
        newer = create_product(name="Home Gallon")
        _add(older)
        _add(newer)

        repo = current_domain.repository_for(WishlistItem)
        item = repo._dao.query.filter(product_id=older).all().items[0]
        item.added_at = datetime.now() - timedelta(days=1)
        repo.add(item)

        assert [card.name for _, card in wishlist_products("user-1")] == ["Home Gallon", "Spring Water"]

    def test_stock_state_comes_from_the_card(self, create_product):
        product_id = create_product()
        _add(product_id)
        current_domain.process(MarkOutOfStock(product_id=product_id), asynchronous=False)

        [(_, card)] = wishlist_products("user-1")
        assert card.out_of_stock is True

    def test_removed_product_leaves_every_wishlist(self, create_product):
        product_id = create_product()
        _add(product_id, "user-1")
        _add(product_id, "user-2")

        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)

        assert wishlist_products("user-1") == []
        assert wishlist_count("user-1") == 0
        assert wishlist_count("user-2") == 0
