"""Pydantic request/response schemas for the Reviews API."""

from datetime import datetime

from pydantic import BaseModel, Field


class SubmitReviewRequest(BaseModel):
    product_id: str
    user_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=3)

    model_config = {
        "json_schema_extra": {
            "examples": [{"product_id": "prod-001", "user_id": "user-001", "rating": 5, "comment": "Crisp and cold"}]
        }
    }


class RateDeliveryRequest(BaseModel):
    user_id: str
    order_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=3)


class RateAppRequest(BaseModel):
    user_id: str
    feature: str = Field(min_length=1, max_length=100)
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=3)


class ReviewIdResponse(BaseModel):
    review_id: str


class RatingIdResponse(BaseModel):
    rating_id: str


class ReviewResponse(BaseModel):
    review_id: str
    user_id: str
    rating: int
    comment: str
    is_verified: bool
    created_at: datetime | None = None


class ProductRatingResponse(BaseModel):
    product_id: str
    average: float
    count: int
    distribution: dict[str, int]


class RateableProductResponse(BaseModel):
    product_id: str
    product_name: str | None = None
    order_id: str


class DeliveredOrderResponse(BaseModel):
    order_id: str
    order_number: str
    driver_id: str | None = None
    delivered_at: datetime


class UserRatingResponse(BaseModel):
    rating_id: str
    rating_type: str
    order_id: str | None = None
    feature: str | None = None
    rating: int
    comment: str
    created_at: datetime | None = None
