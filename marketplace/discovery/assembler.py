from __future__ import annotations

from typing import Callable, Mapping

from pydantic import BaseModel

from ..geo.distance import Coordinate, distance_km
from ..ratings.models import AggregatedRating
from .models import (
    CategoryOut,
    Establishment,
    EstablishmentDetail,
    EstablishmentSummary,
    MediaOut,
    Professional,
    ProfessionalDetail,
    ProfessionalSummary,
    RankedResult,
    Subject,
    SubjectKind,
)


def assemble(
    subject: Subject,
    origin: Coordinate | None,
    rating_lookup: Mapping[str, AggregatedRating],
) -> RankedResult:
    """Join a subject with its distance from *origin* and its aggregated rating."""
    distance = None
    if origin is not None and subject.coordinate is not None:
        distance = distance_km(origin, subject.coordinate)
    return RankedResult(
        subject=subject,
        distance_km=distance,
        rating=rating_lookup.get(subject.id),
    )


# ── Display projections ──────────────────────────────────────────────────


def _rating_fields(result: RankedResult) -> dict:
    rating = result.rating
    return {
        "rating": rating.average if rating else None,
        "review_count": rating.sample_count if rating else 0,
        "distance_km": result.distance_km,
    }


def _category_out(subject: Subject) -> CategoryOut | None:
    category = subject.category
    if category is None:
        return None
    return CategoryOut(id=category.id, name=category.name, kind=category.kind)


def _professional_summary(result: RankedResult) -> ProfessionalSummary:
    p: Professional = result.subject
    return ProfessionalSummary(
        id=p.id,
        name=p.name,
        avatar_url=p.avatar_url,
        is_active=p.is_active,
        tier=p.tier,
        gender=p.gender,
        category=_category_out(p),
        **_rating_fields(result),
    )


def _establishment_summary(result: RankedResult) -> EstablishmentSummary:
    e: Establishment = result.subject
    return EstablishmentSummary(
        id=e.id,
        name=e.name,
        city=e.city,
        address=e.address,
        phone=e.phone,
        description=e.description,
        gallery=[m.url for m in e.gallery],
        category=_category_out(e),
        **_rating_fields(result),
    )


def _professional_detail(result: RankedResult) -> ProfessionalDetail:
    p: Professional = result.subject
    return ProfessionalDetail(
        id=p.id,
        name=p.name,
        avatar_url=p.avatar_url,
        category=p.category.name if p.category else None,
        is_active=p.is_active,
        tier=p.tier,
        gender=p.gender,
        description=p.service_description or p.bio,
        city=p.city,
        address=p.address,
        is_online=p.is_online,
        last_seen=p.last_seen,
        gallery=[MediaOut(url=m.url, type=m.type) for m in p.gallery],
        **_rating_fields(result),
    )


def _establishment_detail(result: RankedResult) -> EstablishmentDetail:
    e: Establishment = result.subject
    return EstablishmentDetail(
        id=e.id,
        name=e.name,
        city=e.city,
        address=e.address,
        phone=e.phone,
        description=e.description,
        gallery=[m.url for m in e.gallery],
        category=e.category.name if e.category else None,
        **_rating_fields(result),
    )


_SUMMARY_PROJECTIONS: dict[SubjectKind, Callable[[RankedResult], BaseModel]] = {
    SubjectKind.PROFESSIONAL: _professional_summary,
    SubjectKind.ESTABLISHMENT: _establishment_summary,
}

_DETAIL_PROJECTIONS: dict[SubjectKind, Callable[[RankedResult], BaseModel]] = {
    SubjectKind.PROFESSIONAL: _professional_detail,
    SubjectKind.ESTABLISHMENT: _establishment_detail,
}


def project(result: RankedResult) -> BaseModel:
    """Display shape used in discovery listings."""
    return _SUMMARY_PROJECTIONS[result.subject.kind](result)


def project_detail(result: RankedResult) -> BaseModel:
    """Display shape used on a single subject page."""
    return _DETAIL_PROJECTIONS[result.subject.kind](result)
