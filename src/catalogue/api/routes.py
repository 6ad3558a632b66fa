"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    BestSellersResponse,
    CategoryIdResponse,
    CategoryResponse,
    ChangePriceRequest,
    CreateCategoryRequest,
    CreateOfferRequest,
    CreateProductRequest,
    OfferIdResponse,
    OfferResponse,
    OfferStatusResponse,
    PlatformSettingsResponse,
    ProductCardResponse,
    ProductIdResponse,
    ProductPageResponse,
    StatusResponse,
    UpdateCategoryRequest,
    UpdatePlatformSettingsRequest,
    UpdateProductDetailsRequest,
    WishlistCountResponse,
    WishlistEntryResponse,
    WishlistMembershipResponse,
    WishlistRequest,
    WishlistResponse,
)
from catalogue.category.management import CreateCategory, DeactivateCategory, UpdateCategory, list_active_categories
from catalogue.offer.management import CreateOffer, ToggleOfferStatus, list_active_offers
from catalogue.product.lifecycle import MarkInStock, MarkOutOfStock, PublishProduct, RemoveProduct, UnpublishProduct
from catalogue.product.management import ChangeProductPrice, CreateProduct, UpdateProductDetails
from catalogue.projections.product_card import DEFAULT_PAGE_SIZE, best_sellers, browse_products
from catalogue.settings.management import UpdatePlatformSettings, get_platform_settings
from catalogue.wishlist.wishlist import (
    AddToWishlist,
    RemoveFromWishlist,
    is_in_wishlist,
    wishlist_count,
    wishlist_products,
)

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
offer_router = APIRouter(prefix="/offers", tags=["offers"])
settings_router = APIRouter(prefix="/settings", tags=["settings"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _card(card) -> ProductCardResponse:
    return ProductCardResponse(
        product_id=str(card.product_id),
        name=card.name,
        slug=card.slug,
        price=card.price,
        compare_at_price=card.compare_at_price,
        image_url=card.image_url,
        category_slug=card.category_slug,
        brand=card.brand,
        size=card.size,
        out_of_stock=bool(card.out_of_stock),
        rating_average=card.rating_average or 0.0,
        rating_count=card.rating_count or 0,
        sales_count=card.sales_count or 0,
    )


# --- Product endpoints ---


@product_router.get("", response_model=ProductPageResponse)
async def list_products(
    search: str | None = None,
    slug: str | None = Query(None, description="Category slug"),
    price_min: float | None = None,
    price_max: float | None = None,
    sort_by: str | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
) -> ProductPageResponse:
    result = browse_products(
        search=search,
        category_slug=slug,
        price_min=price_min,
        price_max=price_max,
        sort_by=sort_by,
        page=page,
        page_size=page_size,
    )
    return ProductPageResponse(
        products=[_card(c) for c in result["products"]],
        total=result["total"],
        total_pages=result["total_pages"],
        current_page=result["current_page"],
    )


@product_router.get("/best-sellers", response_model=BestSellersResponse)
async def list_best_sellers(page: int = Query(1, ge=1), limit: int = Query(12, ge=1, le=100)) -> BestSellersResponse:
    result = best_sellers(page=page, limit=limit)
    return BestSellersResponse(products=[_card(c) for c in result["products"]], total=result["total"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    result = current_domain.process(CreateProduct(**body.model_dump(exclude_none=True)), asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}/details", response_model=StatusResponse)
async def update_product_details(product_id: str, body: UpdateProductDetailsRequest) -> StatusResponse:
    command = UpdateProductDetails(product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def change_price(product_id: str, body: ChangePriceRequest) -> StatusResponse:
    command = ChangeProductPrice(product_id=product_id, price=body.price, compare_at_price=body.compare_at_price)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/publish", response_model=StatusResponse)
async def publish_product(product_id: str) -> StatusResponse:
    current_domain.process(PublishProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/unpublish", response_model=StatusResponse)
async def unpublish_product(product_id: str) -> StatusResponse:
    current_domain.process(UnpublishProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/out-of-stock", response_model=StatusResponse)
async def mark_out_of_stock(product_id: str) -> StatusResponse:
    current_domain.process(MarkOutOfStock(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/in-stock", response_model=StatusResponse)
async def mark_in_stock(product_id: str) -> StatusResponse:
    current_domain.process(MarkInStock(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [
        CategoryResponse(
            category_id=str(c.id),
            name=c.name,
            slug=c.slug,
            image_url=c.image_url,
            display_order=c.display_order or 0,
        )
        for c in list_active_categories()
    ]


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    result = current_domain.process(CreateCategory(**body.model_dump(exclude_none=True)), asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.put("/{category_id}", response_model=StatusResponse)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> StatusResponse:
    command = UpdateCategory(category_id=category_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@category_router.put("/{category_id}/deactivate", response_model=StatusResponse)
async def deactivate_category(category_id: str) -> StatusResponse:
    current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- Offer endpoints ---


@offer_router.get("", response_model=list[OfferResponse])
async def list_offers() -> list[OfferResponse]:
    return [
        OfferResponse(
            offer_id=str(o.id),
            title=o.title,
            description=o.description,
            discount_percentage=o.discount_percentage,
            product_ids=o.product_id_list,
            banner_url=o.banner_url,
            is_active=o.is_active,
            display_order=o.display_order or 0,
        )
        for o in list_active_offers()
    ]


@offer_router.post("", status_code=201, response_model=OfferIdResponse)
async def create_offer(body: CreateOfferRequest) -> OfferIdResponse:
    payload = body.model_dump(exclude_none=True)
    payload["product_ids"] = json.dumps(body.product_ids)
    result = current_domain.process(CreateOffer(**payload), asynchronous=False)
    return OfferIdResponse(offer_id=result)


@offer_router.put("/{offer_id}/toggle", response_model=OfferStatusResponse)
async def toggle_offer(offer_id: str) -> OfferStatusResponse:
    is_active = current_domain.process(ToggleOfferStatus(offer_id=offer_id), asynchronous=False)
    return OfferStatusResponse(offer_id=offer_id, is_active=is_active)


# --- Platform settings ---


def _settings_response(settings) -> PlatformSettingsResponse:
    return PlatformSettingsResponse(
        tax_percentage=settings.tax_percentage,
        shipping_fee=settings.shipping_fee,
        min_order_for_free_shipping=settings.min_order_for_free_shipping,
        currency=settings.currency,
        company_name=settings.company_name,
        company_phone=settings.company_phone,
        company_email=settings.company_email,
    )


@settings_router.get("", response_model=PlatformSettingsResponse)
async def read_settings() -> PlatformSettingsResponse:
    return _settings_response(get_platform_settings())


@settings_router.put("", response_model=PlatformSettingsResponse)
async def update_settings(body: UpdatePlatformSettingsRequest) -> PlatformSettingsResponse:
    current_domain.process(UpdatePlatformSettings(**body.model_dump(exclude_none=True)), asynchronous=False)
    return _settings_response(get_platform_settings())


# --- Wishlist ---


@wishlist_router.get("/users/{user_id}", response_model=WishlistResponse)
async def read_wishlist(user_id: str) -> WishlistResponse:
    entries = [
        WishlistEntryResponse(product=_card(card), added_at=item.added_at) for item, card in wishlist_products(user_id)
    ]
    out_of_stock = sum(1 for entry in entries if entry.product.out_of_stock)
    return WishlistResponse(
        products=entries,
        total=len(entries),
        in_stock=len(entries) - out_of_stock,
        out_of_stock=out_of_stock,
    )


@wishlist_router.get("/users/{user_id}/count", response_model=WishlistCountResponse)
async def read_wishlist_count(user_id: str) -> WishlistCountResponse:
    return WishlistCountResponse(count=wishlist_count(user_id))


@wishlist_router.get("/users/{user_id}/products/{product_id}", response_model=WishlistMembershipResponse)
async def check_wishlist(user_id: str, product_id: str) -> WishlistMembershipResponse:
    return WishlistMembershipResponse(product_id=product_id, in_wishlist=is_in_wishlist(user_id, product_id))


@wishlist_router.post("", status_code=201, response_model=WishlistCountResponse)
async def add_to_wishlist(body: WishlistRequest) -> WishlistCountResponse:
    count = current_domain.process(AddToWishlist(**body.model_dump()), asynchronous=False)
    return WishlistCountResponse(count=count)


@wishlist_router.delete("/users/{user_id}/products/{product_id}", response_model=WishlistCountResponse)
async def remove_from_wishlist(user_id: str, product_id: str) -> WishlistCountResponse:
    count = current_domain.process(RemoveFromWishlist(user_id=user_id, product_id=product_id), asynchronous=False)
    return WishlistCountResponse(count=count)
