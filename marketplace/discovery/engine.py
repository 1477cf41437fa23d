from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ..geo.distance import Coordinate
from ..ratings.aggregator import aggregate_by_subject
from ..ratings.models import AggregatedRating, HeartReview, RatingScale, StarReview
from .assembler import assemble
from .criteria import DiscoveryCriteria, SortKey
from .filters import filter_results
from .models import RankedResult, Subject, SubjectKind

Review = HeartReview | StarReview

SCALE_BY_KIND: dict[SubjectKind, RatingScale] = {
    SubjectKind.PROFESSIONAL: RatingScale.hearts,
    SubjectKind.ESTABLISHMENT: RatingScale.stars,
}


class NotFound(LookupError):
    """No subject of the requested kind has the requested id."""

    def __init__(self, kind: SubjectKind, subject_id: str) -> None:
        super().__init__(f"{kind.value.lower()} {subject_id!r} not found")
        self.kind = kind
        self.subject_id = subject_id


def build_rating_lookups(
    reviews: Iterable[Review],
) -> dict[SubjectKind, Mapping[str, AggregatedRating]]:
    """Aggregate each review scale separately, keyed by the kind it rates."""
    by_scale: dict[RatingScale, list[Review]] = {scale: [] for scale in RatingScale}
    for review in reviews:
        by_scale[review.scale].append(review)
    return {
        kind: aggregate_by_subject(by_scale[scale])
        for kind, scale in SCALE_BY_KIND.items()
    }


def _distance_key(result: RankedResult) -> tuple:
    missing = result.distance_km is None
    return (missing, result.distance_km or 0.0, result.subject.id)


def _rating_key(result: RankedResult) -> tuple:
    missing = result.rating is None
    average = result.rating.average if result.rating else 0.0
    return (missing, -average, result.subject.id)


_SORT_KEYS = {
    SortKey.distance: _distance_key,
    SortKey.rating: _rating_key,
}


def sort_results(results: list[RankedResult], key: SortKey | None) -> list[RankedResult]:
    """Order by *key*; unknown values last, ties by subject id. No key keeps input order."""
    if key is None:
        return results
    return sorted(results, key=_SORT_KEYS[key])


def discover(
    subjects: Sequence[Subject],
    reviews: Iterable[Review],
    origin: Coordinate | None,
    criteria: DiscoveryCriteria,
) -> list[RankedResult]:
    """Rank and filter *subjects* around *origin*."""
    lookups = build_rating_lookups(reviews)
    assembled = [assemble(s, origin, lookups[s.kind]) for s in subjects]
    return sort_results(filter_results(assembled, criteria), criteria.sort)


def discover_one(
    subject_id: str,
    kind: SubjectKind,
    subjects: Iterable[Subject],
    reviews: Iterable[Review],
    origin: Coordinate | None = None,
) -> RankedResult:
    """Assemble a single subject without filtering, or raise ``NotFound``."""
    subject = next(
        (s for s in subjects if s.id == subject_id and s.kind is kind), None,
    )
    if subject is None:
        raise NotFound(kind, subject_id)
    lookups = build_rating_lookups(reviews)
    return assemble(subject, origin, lookups[kind])
