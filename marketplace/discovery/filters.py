from __future__ import annotations

from typing import Callable, Iterable

from .criteria import DiscoveryCriteria
from .models import Professional, RankedResult

Predicate = Callable[[RankedResult], bool]


def _matches_category(category_id: str) -> Predicate:
    def predicate(result: RankedResult) -> bool:
        category = result.subject.category
        return category is not None and category.id == category_id

    return predicate


def _matches_attribute(name: str, expected: str) -> Predicate:
    # Only professionals carry gender/tier; other kinds pass through.
    def predicate(result: RankedResult) -> bool:
        if not isinstance(result.subject, Professional):
            return True
        return getattr(result.subject, name) == expected

    return predicate


def _within_range(range_km: float) -> Predicate:
    # Unknown distance is kept: it is not the same as "out of range".
    def predicate(result: RankedResult) -> bool:
        return result.distance_km is None or result.distance_km <= range_km

    return predicate


def _meets_rating(min_rating: float) -> Predicate:
    # Unrated subjects are kept, same policy as distance.
    def predicate(result: RankedResult) -> bool:
        return result.rating is None or result.rating.average >= min_rating

    return predicate


def build_predicates(criteria: DiscoveryCriteria) -> list[Predicate]:
    """One predicate per supplied criterion; absent criteria add nothing."""
    predicates: list[Predicate] = []
    if criteria.category_id is not None:
        predicates.append(_matches_category(criteria.category_id))
    if criteria.gender is not None:
        predicates.append(_matches_attribute("gender", criteria.gender))
    if criteria.tier is not None:
        predicates.append(_matches_attribute("tier", criteria.tier))
    if criteria.range_km is not None:
        predicates.append(_within_range(criteria.range_km))
    if criteria.min_rating is not None:
        predicates.append(_meets_rating(criteria.min_rating))
    return predicates


def filter_results(
    results: Iterable[RankedResult], criteria: DiscoveryCriteria,
) -> list[RankedResult]:
    """Keep the results that satisfy every supplied criterion, in input order."""
    predicates = build_predicates(criteria)
    return [r for r in results if all(p(r) for p in predicates)]
