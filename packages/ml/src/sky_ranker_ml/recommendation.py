"""Ranked recommendation returned by the engine."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from sky_ranker_core.schemas import Offer  # noqa: TC001
from sky_ranker_ml.features import FeatureVector  # noqa: TC001
from sky_ranker_ml.weights import STAGE_AUTOPILOT_BOOKINGS, STAGE_LEARNING_BOOKINGS


class PersonalizationStage(StrEnum):
    """How familiar the engine is with a traveller, by booking count."""

    DISCOVERY = "DISCOVERY"
    LEARNING = "LEARNING"
    AUTOPILOT = "AUTOPILOT"

    @classmethod
    def from_bookings(cls, total_bookings: int) -> PersonalizationStage:
        if total_bookings >= STAGE_AUTOPILOT_BOOKINGS:
            return cls.AUTOPILOT
        if total_bookings >= STAGE_LEARNING_BOOKINGS:
            return cls.LEARNING
        return cls.DISCOVERY


class RankedOffer(BaseModel):
    """One offer in the recommendation, with its score and explanation."""

    model_config = ConfigDict(frozen=True)

    rank: int
    offer: Offer
    score: int = Field(ge=0, le=100)
    raw_score: float = Field(exclude=True, repr=False)
    features: FeatureVector
    matched_quality_record_ids: tuple[str, ...] = ()
    reasons: tuple[str, ...] = ()
    price_insight: str | None = None


class Recommendation(BaseModel):
    """Top-N ranked offers plus request-level confidence."""

    model_config = ConfigDict(frozen=True)

    offers: tuple[RankedOffer, ...]
    total_scored: int
    returned: int
    confidence: float
    confidence_pct: int
    degraded: bool
    stage: PersonalizationStage
    commentary: str | None = None

    @property
    def top(self) -> RankedOffer | None:
        return self.offers[0] if self.offers else None
