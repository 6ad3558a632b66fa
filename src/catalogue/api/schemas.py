"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Bottled Water", "display_order": 1}]}}

    name: str = Field(..., max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    display_order: int = 0


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    display_order: int | None = None


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Spring Water 330ml x 40",
                    "price": 18.5,
                    "compare_at_price": 22.0,
                    "category_slug": "bottled-water",
                    "brand": "Nova",
                    "size": "330ml",
                    "is_published": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    price: float = Field(..., gt=0)
    slug: str | None = Field(None, max_length=200)
    compare_at_price: float | None = Field(None, ge=0)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    category_slug: str | None = Field(None, max_length=200)
    brand: str | None = Field(None, max_length=100)
    size: str | None = Field(None, max_length=50)
    details: str | None = None
    is_published: bool = False


class UpdateProductDetailsRequest(BaseModel):
    name: str | None = Field(None, max_length=200)
    slug: str | None = Field(None, max_length=200)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    category_slug: str | None = Field(None, max_length=200)
    brand: str | None = Field(None, max_length=100)
    size: str | None = Field(None, max_length=50)
    details: str | None = None


class ChangePriceRequest(BaseModel):
    price: float = Field(..., gt=0)
    compare_at_price: float | None = Field(None, ge=0)


class CreateOfferRequest(BaseModel):
    title: str = Field(..., max_length=150)
    description: str | None = None
    discount_percentage: float = Field(0.0, ge=0, le=100)
    product_ids: list[str] = Field(default_factory=list)
    banner_url: str | None = Field(None, max_length=500)
    display_order: int = 0


class UpdatePlatformSettingsRequest(BaseModel):
    tax_percentage: float | None = Field(None, ge=0, le=100)
    shipping_fee: float | None = Field(None, ge=0)
    min_order_for_free_shipping: float | None = Field(None, ge=0)
    currency: str | None = Field(None, max_length=3)
    company_name: str | None = Field(None, max_length=150)
    company_phone: str | None = Field(None, max_length=20)
    company_email: str | None = Field(None, max_length=254)


# --- Response Schemas ---


class CategoryIdResponse(BaseModel):
    category_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class OfferIdResponse(BaseModel):
    offer_id: str


class CategoryResponse(BaseModel):
    category_id: str
    name: str
    slug: str
    image_url: str | None = None
    display_order: int = 0


class ProductCardResponse(BaseModel):
    product_id: str
    name: str
    slug: str
    price: float
    compare_at_price: float | None = None
    image_url: str | None = None
    category_slug: str | None = None
    brand: str | None = None
    size: str | None = None
    out_of_stock: bool = False
    rating_average: float = 0.0
    rating_count: int = 0
    sales_count: int = 0


class ProductPageResponse(BaseModel):
    products: list[ProductCardResponse]
    total: int
    total_pages: int
    current_page: int


class BestSellersResponse(BaseModel):
    products: list[ProductCardResponse]
    total: int


class OfferResponse(BaseModel):
    offer_id: str
    title: str
    description: str | None = None
    discount_percentage: float
    product_ids: list[str]
    banner_url: str | None = None
    is_active: bool
    display_order: int


class OfferStatusResponse(BaseModel):
    offer_id: str
    is_active: bool


class PlatformSettingsResponse(BaseModel):
    tax_percentage: float
    shipping_fee: float
    min_order_for_free_shipping: float
    currency: str
    company_name: str | None = None
    company_phone: str | None = None
    company_email: str | None = None


class StatusResponse(BaseModel):
    status: str = "ok"


# --- Wishlist ---


class WishlistRequest(BaseModel):
    user_id: str
    product_id: str


class WishlistCountResponse(BaseModel):
    count: int


class WishlistMembershipResponse(BaseModel):
    product_id: str
    in_wishlist: bool


class WishlistEntryResponse(BaseModel):
    product: ProductCardResponse
    added_at: datetime | None = None


class WishlistResponse(BaseModel):
    products: list[WishlistEntryResponse]
    total: int
    in_stock: int
    out_of_stock: int
