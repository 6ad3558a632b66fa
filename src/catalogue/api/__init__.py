"""Catalogue domain API package."""

from catalogue.api.routes import category_router, offer_router, product_router, settings_router, wishlist_router

__all__ = ["product_router", "category_router", "offer_router", "settings_router", "wishlist_router"]
