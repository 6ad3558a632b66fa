"""FastAPI routes for the Reviews bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts).
"""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from reviews.api.schemas import (
    DeliveredOrderResponse,
    ProductRatingResponse,
    RateableProductResponse,
    RateAppRequest,
    RateDeliveryRequest,
    RatingIdResponse,
    ReviewIdResponse,
    ReviewResponse,
    SubmitReviewRequest,
    UserRatingResponse,
)
from reviews.projections.product_rating import product_rating
from reviews.rating.submission import (
    RateApp,
    RateDelivery,
    app_ratings,
    delivery_ratings,
    unrated_deliveries,
)
from reviews.review.submission import SubmitProductReview, product_reviews, rateable_products

review_router = APIRouter(prefix="/reviews", tags=["reviews"])
rating_router = APIRouter(prefix="/ratings", tags=["ratings"])


def _user_rating(record) -> UserRatingResponse:
    return UserRatingResponse(
        rating_id=str(record.id),
        rating_type=record.rating_type,
        order_id=str(record.order_id) if record.order_id else None,
        feature=record.feature,
        rating=record.rating,
        comment=record.comment,
        created_at=record.created_at,
    )


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest) -> ReviewIdResponse:
    review_id = current_domain.process(SubmitProductReview(**body.model_dump()), asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@review_router.get("/products/{product_id}", response_model=list[ReviewResponse])
async def list_product_reviews(product_id: str) -> list[ReviewResponse]:
    return [
        ReviewResponse(
            review_id=str(r.id),
            user_id=str(r.user_id),
            rating=r.rating,
            comment=r.comment,
            is_verified=bool(r.is_verified),
            created_at=r.created_at,
        )
        for r in product_reviews(product_id)
    ]


@review_router.get("/products/{product_id}/rating", response_model=ProductRatingResponse)
async def get_product_rating(product_id: str) -> ProductRatingResponse:
    return ProductRatingResponse(**product_rating(product_id))


@review_router.get("/users/{user_id}/rateable", response_model=list[RateableProductResponse])
async def list_rateable_products(user_id: str) -> list[RateableProductResponse]:
    return [
        RateableProductResponse(product_id=str(p.product_id), product_name=p.product_name, order_id=str(p.order_id))
        for p in rateable_products(user_id)
    ]


@rating_router.post("/delivery", status_code=201, response_model=RatingIdResponse)
async def rate_delivery(body: RateDeliveryRequest) -> RatingIdResponse:
    rating_id = current_domain.process(RateDelivery(**body.model_dump()), asynchronous=False)
    return RatingIdResponse(rating_id=rating_id)


@rating_router.post("/app", status_code=201, response_model=RatingIdResponse)
async def rate_app(body: RateAppRequest) -> RatingIdResponse:
    rating_id = current_domain.process(RateApp(**body.model_dump()), asynchronous=False)
    return RatingIdResponse(rating_id=rating_id)


@rating_router.get("/users/{user_id}/deliveries", response_model=list[DeliveredOrderResponse])
async def list_unrated_deliveries(user_id: str) -> list[DeliveredOrderResponse]:
    return [
        DeliveredOrderResponse(
            order_id=str(o.order_id),
            order_number=o.order_number,
            driver_id=str(o.driver_id) if o.driver_id else None,
            delivered_at=o.delivered_at,
        )
        for o in unrated_deliveries(user_id)
    ]


@rating_router.get("/users/{user_id}", response_model=list[UserRatingResponse])
async def list_user_ratings(user_id: str) -> list[UserRatingResponse]:
    return [_user_rating(r) for r in delivery_ratings(user_id) + app_ratings(user_id)]
