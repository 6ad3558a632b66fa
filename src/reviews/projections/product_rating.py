"""ProductRatingStats: running rating statistics per product."""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from reviews.domain import reviews
from reviews.review.events import ProductReviewSubmitted
from reviews.review.review import ProductReview


@reviews.projection
class ProductRatingStats:
    product_id = Identifier(identifier=True, required=True)
    average_rating = Float(default=0.0)
    review_count = Integer(default=0)
    verified_count = Integer(default=0)
    rating_distribution = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    updated_at = DateTime()


def _empty_distribution():
    return {str(score): 0 for score in range(1, 6)}


def _average(distribution):
    total = sum(distribution.values())
    if total == 0:
        return 0.0
    return round(sum(int(score) * count for score, count in distribution.items()) / total, 2)


@reviews.projector(projector_for=ProductRatingStats, aggregates=[ProductReview])
class ProductRatingStatsProjector:
    @on(ProductReviewSubmitted)
    def on_review_submitted(self, event):
        repo = current_domain.repository_for(ProductRatingStats)
        try:
            stats = repo.get(str(event.product_id))
            distribution = json.loads(stats.rating_distribution)
        except ObjectNotFoundError:
            stats = ProductRatingStats(product_id=str(event.product_id), review_count=0, verified_count=0)
            distribution = _empty_distribution()

        key = str(event.rating)
        distribution[key] = distribution.get(key, 0) + 1

        stats.rating_distribution = json.dumps(distribution)
        stats.review_count = stats.review_count + 1
        stats.average_rating = _average(distribution)
        if event.is_verified:
            stats.verified_count = stats.verified_count + 1
        stats.updated_at = event.submitted_at
        repo.add(stats)


def product_rating(product_id):
    """Average and count for a product; zeros when it has no reviews."""
    try:
        stats = current_domain.repository_for(ProductRatingStats).get(str(product_id))
    except ObjectNotFoundError:
        return {"product_id": str(product_id), "average": 0.0, "count": 0, "distribution": _empty_distribution()}
    return {
        "product_id": str(product_id),
        "average": stats.average_rating,
        "count": stats.review_count,
        "distribution": json.loads(stats.rating_distribution),
    }
