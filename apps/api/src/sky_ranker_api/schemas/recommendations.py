"""Recommendation request/response schemas."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from sky_ranker_core.schemas import CabinClass, Offer
from sky_ranker_ml.recommendation import PersonalizationStage

if TYPE_CHECKING:
    from sky_ranker_ml.recommendation import RankedOffer, Recommendation


class RecommendationCreate(BaseModel):
    """Rank an already-fetched offer set for one user."""

    user_id: str = Field(min_length=1)
    route: str = Field(description="Origin-destination, e.g. BLR-DEL")
    offers: list[Offer] = Field(default_factory=list)
    top_n: int | None = None


class RankedOfferResponse(BaseModel):
    """One ranked offer as shown to the traveller.

    Only the total price is exposed; markup and service fees stay internal.
    """

    rank: int
    offer_id: str
    score: int
    airline_code: str
    flight_numbers: list[str]
    departure_time: datetime
    duration_minutes: int
    stops: int
    cabin_class: CabinClass
    price: float
    currency: str
    reasons: list[str]
    price_insight: str | None = None
    matched_quality_record_ids: list[str]

    @classmethod
    def from_ranked(cls, ranked: RankedOffer) -> RankedOfferResponse:
        offer = ranked.offer
        return cls(
            rank=ranked.rank,
            offer_id=offer.offer_id,
            score=ranked.score,
            airline_code=offer.primary_carrier,
            flight_numbers=[s.flight_number for s in offer.segments],
            departure_time=offer.departure_time,
            duration_minutes=offer.duration_minutes,
            stops=offer.stops,
            cabin_class=offer.primary_segment.cabin_class,
            price=offer.price.amount,
            currency=offer.price.currency,
            reasons=list(ranked.reasons),
            price_insight=ranked.price_insight,
            matched_quality_record_ids=list(ranked.matched_quality_record_ids),
        )


class RecommendationResponse(BaseModel):
    """Top-N ranked offers with request-level confidence."""

    offers: list[RankedOfferResponse]
    total_scored: int
    returned: int
    confidence_pct: int
    degraded: bool
    stage: PersonalizationStage
    commentary: str | None = None

    @classmethod
    def from_recommendation(
        cls, recommendation: Recommendation
    ) -> RecommendationResponse:
        return cls(
            offers=[RankedOfferResponse.from_ranked(r) for r in recommendation.offers],
            total_scored=recommendation.total_scored,
            returned=recommendation.returned,
            confidence_pct=recommendation.confidence_pct,
            degraded=recommendation.degraded,
            stage=recommendation.stage,
            commentary=recommendation.commentary,
        )
