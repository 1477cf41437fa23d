from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, TypeVar

from .models import AggregatedRating, HeartReview, RatingScale, StarReview

R = TypeVar("R", HeartReview, StarReview)

_ONE_DECIMAL = Decimal("0.1")


def round_half_up(total: int, count: int) -> float:
    """Return ``total / count`` rounded half-up to one decimal place."""
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def aggregate_by_subject(reviews: Iterable[R]) -> dict[str, AggregatedRating]:
    """Average the scores of *reviews* per subject id in a single pass.

    All reviews must share one scale; hearts and stars are never averaged
    together.
    """
    scale: RatingScale | None = None
    totals: dict[str, list[int]] = {}
    for review in reviews:
        if scale is None:
            scale = review.scale
        elif review.scale is not scale:
            raise ValueError(
                f"cannot aggregate {review.scale.value} reviews with {scale.value} reviews"
            )
        entry = totals.setdefault(review.subject_id, [0, 0])
        entry[0] += review.score
        entry[1] += 1

    return {
        subject_id: AggregatedRating(
            average=round_half_up(total, count),
            sample_count=count,
            scale=scale,
        )
        for subject_id, (total, count) in totals.items()
    }


def aggregate(subject_id: str, reviews: Iterable[R]) -> AggregatedRating | None:
    """Aggregated rating for one subject, or ``None`` if it was never reviewed."""
    return aggregate_by_subject(reviews).get(subject_id)
