from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class RatingScale(str, Enum):
    hearts = "hearts"
    stars = "stars"


@dataclass(frozen=True)
class HeartReview:
    """Review left on a professional after a finished service."""

    scale: ClassVar[RatingScale] = RatingScale.hearts

    subject_id: str
    hearts: int
    comment: str | None = None
    created_at: str | None = None

    @property
    def score(self) -> int:
        return self.hearts


@dataclass(frozen=True)
class StarReview:
    """Review left on an establishment, 1 to 5 stars."""

    scale: ClassVar[RatingScale] = RatingScale.stars

    subject_id: str
    stars: int
    comment: str | None = None
    created_at: str | None = None

    @property
    def score(self) -> int:
        return self.stars


@dataclass(frozen=True)
class AggregatedRating:
    average: float
    sample_count: int
    scale: RatingScale
