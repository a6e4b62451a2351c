from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from .ids import now_ms
from .models import Place, Review

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_USER_NAME = "Current User"


def round_half_up(value: float, ndigits: int = 1) -> float:
    """Round like a person would: 2.25 -> 2.3, not Python's 2.2."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _clamp_rating(rating: int) -> int:
    return max(MIN_RATING, min(MAX_RATING, int(rating)))


def _with_review(place: Place, review: Review) -> Place:
    old_count = place.review_count
    if old_count == len(place.reviews):
        old_total = float(sum(r.rating for r in place.reviews))
    else:
        # Legacy record whose count was kept without the review bodies.
        old_total = place.rating * old_count

    new_count = old_count + 1
    return place.model_copy(
        update={
            "reviews": place.reviews + (review,),
            "review_count": new_count,
            "rating": round_half_up((old_total + review.rating) / new_count, 1),
        }
    )


def add_review(
    catalog: Sequence[Place],
    place_id: str,
    rating: int,
    text: str,
    user_name: str = DEFAULT_USER_NAME,
    now: int | None = None,
) -> tuple[Place, ...]:
    """
    Append a review to ``place_id`` and recompute its average rating.

    Ratings outside 1-5 are clamped. An unknown ``place_id`` returns the
    catalog unchanged. Places other than the target are returned as-is.
    """
    if not any(p.id == place_id for p in catalog):
        return tuple(catalog)

    stamp = now_ms()
    review = Review(
        id=str(stamp),
        place_id=place_id,
        user_name=user_name,
        rating=_clamp_rating(rating),
        text=text,
        timestamp=now if now is not None else stamp,
    )
    return tuple(_with_review(p, review) if p.id == place_id else p for p in catalog)
