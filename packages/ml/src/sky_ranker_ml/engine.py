"""Engine entry point: resolve the traveller's profile, then rank."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from sky_ranker_core.schemas import Offer  # noqa: TC001
from sky_ranker_ml.ranker import OfferRanker
from sky_ranker_ml.recommendation import PersonalizationStage
from sky_ranker_ml.weights import DEFAULT_TOP_N, STAGE_TOP_N

if TYPE_CHECKING:
    from datetime import datetime

    from sky_ranker_core.schemas import PreferenceProfile
    from sky_ranker_ml.collaborators import (
        PreferenceProfileStore,
        RouteQualityRepository,
    )
    from sky_ranker_ml.recommendation import Recommendation

logger = logging.getLogger(__name__)


class RecommendationRequest(BaseModel):
    """What the caller hands the engine: who, where, and which offers."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    route: str
    # Emptiness is checked by the ranker so it surfaces as InvalidInput.
    offers: tuple[Offer, ...] = ()


class RecommendationEngine:
    """Ranks offers for a user against read-only collaborator snapshots.

    With ``top_n_by_stage`` the shortlist shrinks as the engine gets to know
    the traveller; an explicit ``top_n`` always wins.
    """

    def __init__(
        self,
        profiles: PreferenceProfileStore,
        quality: RouteQualityRepository,
        default_top_n: int = DEFAULT_TOP_N,
        top_n_by_stage: bool = False,
    ) -> None:
        self._profiles = profiles
        self._ranker = OfferRanker(quality)
        self._default_top_n = default_top_n
        self._top_n_by_stage = top_n_by_stage

    def recommend(
        self,
        request: RecommendationRequest,
        top_n: int | None = None,
        now: datetime | None = None,
    ) -> Recommendation:
        profile = self._profiles.get_preference_profile(request.user_id)
        recommendation = self._ranker.rank(
            request.route,
            request.offers,
            profile=profile,
            top_n=top_n if top_n is not None else self._shortlist_size(profile),
            now=now,
        )
        if recommendation.degraded:
            logger.info(
                "Degraded personalization for user %s (profile=%s, confidence=%.2f)",
                request.user_id,
                "present" if profile is not None else "absent",
                recommendation.confidence,
            )
        logger.info(
            "Ranked %d offers on %s for user %s, returning %d",
            recommendation.total_scored,
            request.route,
            request.user_id,
            recommendation.returned,
        )
        return recommendation

    def _shortlist_size(self, profile: PreferenceProfile | None) -> int:
        if not self._top_n_by_stage:
            return self._default_top_n
        bookings = profile.total_bookings if profile is not None else 0
        return STAGE_TOP_N[PersonalizationStage.from_bookings(bookings)]
