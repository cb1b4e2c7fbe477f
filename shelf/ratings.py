# shelf/ratings.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, NamedTuple

from shelf.exceptions import ValidationError

MIN_RATING = Decimal("0")
MAX_RATING = Decimal("10")
ONE_PLACE = Decimal("0.1")


class RatingSummary(NamedTuple):
    average_rating: float
    total_reviews: int


def round_half_up(value: Any, places: Decimal = ONE_PLACE) -> float:
    """Round to one decimal place with halves rounded away from zero"""
    return float(Decimal(str(value)).quantize(places, rounding=ROUND_HALF_UP))


def _rating_of(review: Any) -> Any:
    if isinstance(review, dict):
        return review.get("rating")
    return getattr(review, "rating", review)


def aggregate_ratings(reviews: Iterable[Any]) -> RatingSummary:
    """Average rating (one decimal) and count for a book's reviews.

    Accepts review models, dicts with a ``rating`` key or bare numbers.
    Returns (0, 0) when there are no ratings.
    """
    ratings = [Decimal(str(r)) for r in map(_rating_of, reviews) if r is not None]
    if not ratings:
        return RatingSummary(0, 0)
    mean = sum(ratings) / len(ratings)
    return RatingSummary(round_half_up(mean), len(ratings))


def validate_rating(rating: Any) -> float:
    """Check a submitted rating and keep one decimal of precision.

    Raises:
        ValidationError: If the rating is missing, not a number or outside 0-10
    """
    if rating is None or isinstance(rating, bool):
        raise ValidationError("Rating is required")
    try:
        value = Decimal(str(rating).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Rating must be a number, got {rating!r}")
    if not value.is_finite() or value < MIN_RATING or value > MAX_RATING:
        raise ValidationError("Rating must be between 0 and 10")
    return round_half_up(value)
