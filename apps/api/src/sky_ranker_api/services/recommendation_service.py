"""Recommendation service - resolve collaborators, then run the engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from sky_ranker_api.schemas.recommendations import RecommendationResponse
from sky_ranker_core.schemas import PreferenceProfile, RouteQualityRecord
from sky_ranker_db.models.preference import TravelPreference
from sky_ranker_db.models.route_quality import RouteQuality
from sky_ranker_ml.collaborators import (
    InMemoryProfileStore,
    InMemoryRouteQualityRepository,
)
from sky_ranker_ml.engine import RecommendationEngine, RecommendationRequest
from sky_ranker_ml.exceptions import InvalidInput
from sky_ranker_ml.ranker import normalise_route

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

    from sky_ranker_api.config import ApiSettings
    from sky_ranker_api.schemas.recommendations import RecommendationCreate

logger = logging.getLogger(__name__)


class RecommendationService:
    """Loads the profile and quality rows a request needs, then ranks.

    All database access happens up front; the engine itself only sees
    in-memory snapshots and does no I/O.
    """

    def __init__(self, db: AsyncSession, settings: ApiSettings) -> None:
        self._db = db
        self._settings = settings

    async def get_profile(self, user_id: str) -> PreferenceProfile | None:
        """Load a user's preference profile, or None when there is none yet."""
        result = await self._db.execute(
            select(TravelPreference).where(TravelPreference.user_id == user_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return PreferenceProfile.model_validate(row, from_attributes=True)

    async def get_route_quality(self, route: str) -> list[RouteQualityRecord]:
        """All quality rows for a route, across every scope."""
        result = await self._db.execute(
            select(RouteQuality)
            .where(RouteQuality.route == route)
            .order_by(RouteQuality.record_id)
        )
        return [
            RouteQualityRecord.model_validate(row, from_attributes=True)
            for row in result.scalars().all()
        ]

    async def recommend(
        self, request: RecommendationCreate, now: datetime | None = None
    ) -> RecommendationResponse:
        """Rank the request's offers for its user.

        Raises:
            InvalidInput: malformed request; see ``OfferRanker.rank``.
        """
        route = normalise_route(request.route)
        top_n = request.top_n
        if top_n is not None and top_n > self._settings.max_top_n:
            msg = f"top_n must be at most {self._settings.max_top_n}, got {top_n}"
            raise InvalidInput(msg)

        profile = await self.get_profile(request.user_id)
        records = await self.get_route_quality(route)
        logger.debug(
            "Resolved %s profile and %d quality records for %s on %s",
            "a" if profile is not None else "no",
            len(records),
            request.user_id,
            route,
        )

        engine = RecommendationEngine(
            InMemoryProfileStore([profile] if profile is not None else []),
            InMemoryRouteQualityRepository(records),
            default_top_n=self._settings.default_top_n,
            top_n_by_stage=self._settings.top_n_by_stage,
        )
        recommendation = engine.recommend(
            RecommendationRequest(
                user_id=request.user_id, route=route, offers=tuple(request.offers)
            ),
            top_n=top_n,
            now=now,
        )
        return RecommendationResponse.from_recommendation(recommendation)
