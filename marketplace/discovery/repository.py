from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Iterable

from ..geo.distance import coordinate_from
from ..media import media_from_url, split_urls
from ..ratings.models import HeartReview, StarReview
from .data_store import get_frame
from .models import Category, Establishment, Professional, Subject, SubjectKind

logger = logging.getLogger(__name__)


class InvalidRating(ValueError):
    """Raised when a submitted star rating is not an integer from 1 to 5."""


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SubjectRepository:
    """In-memory snapshot of professionals, establishments and their reviews."""

    def __init__(self) -> None:
        self._categories = self._load_categories()
        self._professionals = self._load_professionals()
        self._establishments = self._load_establishments()
        self._heart_reviews = self._load_heart_reviews()
        self._star_reviews = self._load_star_reviews()

    # ── Loading ──────────────────────────────────────────────────────────

    def _load_categories(self) -> dict[str, Category]:
        df = get_frame("categories")
        return {
            str(row["id"]): Category(
                id=str(row["id"]), name=str(row["name"]), kind=SubjectKind(row["kind"]),
            )
            for _, row in df.iterrows()
        }

    def _load_professionals(self) -> list[Professional]:
        df = get_frame("professionals")
        return [
            Professional(
                id=str(row["id"]),
                username=str(row["username"]),
                display_name=_as_str(row["display_name"]),
                category=self._categories.get(row["category_id"]),
                coordinate=coordinate_from(row["latitude"], row["longitude"]),
                gender=_as_str(row["gender"]),
                tier=_as_str(row["tier"]),
                is_active=_as_bool(row["is_active"]),
                is_online=_as_bool(row["is_online"]),
                last_seen=_as_str(row["last_seen"]),
                avatar_url=_as_str(row["avatar_url"]),
                bio=_as_str(row["bio"]),
                service_description=_as_str(row["service_description"]),
                city=_as_str(row["city"]),
                address=_as_str(row["address"]),
                gallery=tuple(media_from_url(u) for u in split_urls(row["gallery_urls"])),
            )
            for _, row in df.iterrows()
        ]

    def _load_establishments(self) -> list[Establishment]:
        df = get_frame("establishments")
        return [
            Establishment(
                id=str(row["id"]),
                name=str(row["name"]),
                category=self._categories.get(row["category_id"]),
                coordinate=coordinate_from(row["latitude"], row["longitude"]),
                phone=_as_str(row["phone"]),
                address=_as_str(row["address"]),
                city=_as_str(row["city"]),
                description=_as_str(row["description"]),
                gallery=tuple(media_from_url(u) for u in split_urls(row["gallery_urls"])),
            )
            for _, row in df.iterrows()
        ]

    def _load_heart_reviews(self) -> list[HeartReview]:
        df = get_frame("professional_reviews")
        return [
            HeartReview(
                subject_id=str(row["professional_id"]),
                hearts=int(row["hearts"]),
                comment=_as_str(row["comment"]),
                created_at=_as_str(row["created_at"]),
            )
            for _, row in df.iterrows()
        ]

    def _load_star_reviews(self) -> list[StarReview]:
        df = get_frame("establishment_reviews")
        return [
            StarReview(
                subject_id=str(row["establishment_id"]),
                stars=int(row["stars"]),
                comment=_as_str(row["comment"]),
                created_at=_as_str(row["created_at"]),
            )
            for _, row in df.iterrows()
        ]

    # ── Queries ──────────────────────────────────────────────────────────

    def list_categories(self) -> list[Category]:
        return sorted(self._categories.values(), key=lambda c: (c.kind.value, c.name))

    def _subjects(self, kind: SubjectKind) -> list[Subject]:
        if kind is SubjectKind.PROFESSIONAL:
            return list(self._professionals)
        return list(self._establishments)

    def list_subjects(
        self,
        kind: SubjectKind,
        category_id: str | None = None,
        gender: str | None = None,
        tier: str | None = None,
    ) -> list[Subject]:
        """Subjects of *kind*, pre-filtered on exact-match attributes."""
        subjects = self._subjects(kind)
        if category_id:
            subjects = [s for s in subjects if s.category and s.category.id == category_id]
        if kind is SubjectKind.PROFESSIONAL:
            if gender:
                subjects = [s for s in subjects if s.gender == gender]
            if tier:
                subjects = [s for s in subjects if s.tier == tier]
        return subjects

    def list_reviews(
        self, kind: SubjectKind, subject_ids: Iterable[str],
    ) -> list[HeartReview] | list[StarReview]:
        ids = set(subject_ids)
        reviews = self._heart_reviews if kind is SubjectKind.PROFESSIONAL else self._star_reviews
        return [r for r in reviews if r.subject_id in ids]

    def get_subject(self, kind: SubjectKind, subject_id: str) -> Subject | None:
        return next((s for s in self._subjects(kind) if s.id == subject_id), None)

    # ── Writes ───────────────────────────────────────────────────────────

    def add_establishment_review(
        self, establishment_id: str, stars: Any, comment: str | None = None,
    ) -> StarReview:
        try:
            value = float(stars)
        except (TypeError, ValueError):
            raise InvalidRating(f"stars must be a number, got {stars!r}") from None
        if isinstance(stars, bool) or not value.is_integer() or not 1 <= value <= 5:
            raise InvalidRating(f"stars must be an integer from 1 to 5, got {stars!r}")

        review = StarReview(
            subject_id=establishment_id,
            stars=int(value),
            comment=comment if isinstance(comment, str) else None,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._star_reviews.append(review)
        logger.info("Recorded %d-star review for establishment %s", review.stars, establishment_id)
        return review


_repository: SubjectRepository | None = None
_repository_lock = threading.Lock()


def get_repository() -> SubjectRepository:
    """Return the process-wide repository, loading it on first call."""
    global _repository
    if _repository is None:
        with _repository_lock:
            if _repository is None:
                _repository = SubjectRepository()
    return _repository


def reset_repository() -> None:
    global _repository
    with _repository_lock:
        _repository = None
