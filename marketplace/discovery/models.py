from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, Field

from ..geo.distance import Coordinate
from ..media import Media, MediaType
from ..ratings.models import AggregatedRating


class SubjectKind(str, Enum):
    PROFESSIONAL = "PROFESSIONAL"
    ESTABLISHMENT = "ESTABLISHMENT"


# ── Domain records ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    kind: SubjectKind


@dataclass(frozen=True)
class Professional:
    kind: ClassVar[SubjectKind] = SubjectKind.PROFESSIONAL

    id: str
    username: str
    display_name: str | None = None
    category: Category | None = None
    coordinate: Coordinate | None = None
    gender: str | None = None
    tier: str | None = None
    is_active: bool = True
    is_online: bool = False
    last_seen: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    service_description: str | None = None
    city: str | None = None
    address: str | None = None
    gallery: tuple[Media, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.display_name or self.username


@dataclass(frozen=True)
class Establishment:
    kind: ClassVar[SubjectKind] = SubjectKind.ESTABLISHMENT

    id: str
    name: str
    category: Category | None = None
    coordinate: Coordinate | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    description: str | None = None
    gallery: tuple[Media, ...] = field(default_factory=tuple)


Subject = Union[Professional, Establishment]


@dataclass(frozen=True)
class RankedResult:
    subject: Subject
    distance_km: float | None = None
    rating: AggregatedRating | None = None


# ── API schemas ──────────────────────────────────────────────────────────


class CategoryOut(BaseModel):
    id: str
    name: str
    kind: SubjectKind


class MediaOut(BaseModel):
    url: str
    type: MediaType


class ProfessionalSummary(BaseModel):
    id: str
    name: str
    avatar_url: str | None
    rating: float | None
    review_count: int = 0
    distance_km: float | None
    is_active: bool
    tier: str | None
    gender: str | None
    category: CategoryOut | None


class ProfessionalDetail(BaseModel):
    id: str
    name: str
    avatar_url: str | None
    category: str | None
    is_active: bool
    tier: str | None
    gender: str | None
    description: str | None
    city: str | None
    address: str | None
    is_online: bool
    last_seen: str | None
    rating: float | None
    review_count: int = 0
    distance_km: float | None = None
    gallery: list[MediaOut] = Field(default_factory=list)


class EstablishmentSummary(BaseModel):
    id: str
    name: str
    city: str | None
    address: str | None
    phone: str | None
    description: str | None
    rating: float | None
    review_count: int = 0
    distance_km: float | None
    gallery: list[str] = Field(default_factory=list)
    category: CategoryOut | None


class EstablishmentDetail(BaseModel):
    id: str
    name: str
    city: str | None
    address: str | None
    phone: str | None
    description: str | None
    rating: float | None
    review_count: int = 0
    distance_km: float | None = None
    gallery: list[str] = Field(default_factory=list)
    category: str | None


class ReviewRequest(BaseModel):
    # Validated by the repository so that bad values map to INVALID_RATING.
    stars: float | int | str | None = None
    comment: str | None = Field(default=None, max_length=2000)


class ReviewOut(BaseModel):
    establishment_id: str
    stars: int
    comment: str | None
    created_at: str | None
