from __future__ import annotations

import logging
import time

from pydantic import BaseModel

from ..analytics.store import record_event
from ..geo.distance import Coordinate
from .assembler import project, project_detail
from .criteria import DiscoveryCriteria
from .engine import discover, discover_one
from .models import RankedResult, SubjectKind
from .repository import SubjectRepository, get_repository

logger = logging.getLogger(__name__)


class DiscoveryService:
    """Fetches a snapshot from the repository and runs the discovery engine on it."""

    def __init__(self, repository: SubjectRepository | None = None) -> None:
        self._repository = repository

    @property
    def repository(self) -> SubjectRepository:
        return self._repository or get_repository()

    def rank(
        self,
        kind: SubjectKind,
        origin: Coordinate | None,
        criteria: DiscoveryCriteria,
    ) -> list[RankedResult]:
        subjects = self.repository.list_subjects(
            kind,
            category_id=criteria.category_id,
            gender=criteria.gender,
            tier=criteria.tier,
        )
        reviews = self.repository.list_reviews(kind, [s.id for s in subjects])
        return discover(subjects, reviews, origin, criteria)

    def search(
        self,
        kind: SubjectKind,
        origin: Coordinate | None,
        criteria: DiscoveryCriteria,
    ) -> list[BaseModel]:
        start_time = time.time()

        results = self.rank(kind, origin, criteria)

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        record_event("search", {
            "kind": kind.value,
            "category_id": criteria.category_id,
            "gender": criteria.gender,
            "tier": criteria.tier,
            "range_km": criteria.range_km,
            "min_rating": criteria.min_rating,
            "has_origin": origin is not None,
            "sort": criteria.sort.value if criteria.sort else None,
            "results_returned": len(results),
            "response_time_ms": elapsed_ms,
        })
        logger.info(
            "%s search returned %d results in %.1f ms",
            kind.value.lower(), len(results), elapsed_ms,
        )
        return [project(r) for r in results]

    def lookup(
        self, kind: SubjectKind, subject_id: str, origin: Coordinate | None = None,
    ) -> RankedResult:
        """Assembled result for one subject; raises ``NotFound``."""
        subject = self.repository.get_subject(kind, subject_id)
        subjects = [subject] if subject is not None else []
        reviews = self.repository.list_reviews(kind, [subject_id])
        return discover_one(subject_id, kind, subjects, reviews, origin)

    def detail(
        self, kind: SubjectKind, subject_id: str, origin: Coordinate | None = None,
    ) -> BaseModel:
        return project_detail(self.lookup(kind, subject_id, origin))
