"""Offer ranker: validate, extract, score, sort, truncate."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sky_ranker_ml.confidence import confidence as compute_confidence
from sky_ranker_ml.exceptions import InvalidInput
from sky_ranker_ml.explain import build_reasons, commentary, price_insight
from sky_ranker_ml.features import (
    CandidateSet,
    FeatureExtractor,
    select_quality_record,
)
from sky_ranker_ml.recommendation import (
    PersonalizationStage,
    RankedOffer,
    Recommendation,
)
from sky_ranker_ml.scoring import OfferScorer, round_half_up
from sky_ranker_ml.weights import DEFAULT_TOP_N, LOW_CONFIDENCE, MAX_TOP_N

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sky_ranker_core.schemas import Offer, PreferenceProfile, RouteQualityRecord
    from sky_ranker_ml.collaborators import RouteQualityRepository

logger = logging.getLogger(__name__)

ROUTE_PATTERN = re.compile(r"^([A-Z]{3})-([A-Z]{3})$")


def normalise_route(route: str) -> str:
    """Validate a route string like ``BLR-DEL`` and return it upper-cased."""
    candidate = route.strip().upper() if isinstance(route, str) else ""
    match = ROUTE_PATTERN.match(candidate)
    if match is None:
        msg = f"Malformed route {route!r}; expected 'AAA-BBB'"
        raise InvalidInput(msg)
    if match.group(1) == match.group(2):
        msg = f"Route {candidate} has identical origin and destination"
        raise InvalidInput(msg)
    return candidate


def _sort_key(ranked: RankedOffer) -> tuple[float, float, int, int, str]:
    offer = ranked.offer
    return (
        -ranked.raw_score,
        offer.price.amount,
        offer.stops,
        offer.duration_minutes,
        offer.offer_id,
    )


class OfferRanker:
    """Ranks an already-fetched offer set for one traveller."""

    def __init__(self, quality_repository: RouteQualityRepository) -> None:
        self._quality = quality_repository

    def rank(
        self,
        route: str,
        offers: Sequence[Offer],
        profile: PreferenceProfile | None = None,
        top_n: int = DEFAULT_TOP_N,
        now: datetime | None = None,
    ) -> Recommendation:
        """Rank *offers* and return the top ``top_n``.

        Raises:
            InvalidInput: empty offer set, malformed route, duplicate offer
                ids, mixed currencies or an out-of-range ``top_n``.
        """
        route = self._validate(route, offers, top_n)
        now = now or datetime.now(UTC)

        candidates = CandidateSet.from_offers(offers)
        request_confidence = compute_confidence(profile, now)
        extractor = FeatureExtractor(candidates, profile)
        scorer = OfferScorer(profile, request_confidence)
        anchor = profile.price_anchors.get(route) if profile else None

        scored: list[RankedOffer] = []
        records_by_offer: dict[str, tuple[RouteQualityRecord | None, ...]] = {}
        for offer in offers:
            records = self._match_quality(route, offer)
            records_by_offer[offer.offer_id] = records
            features = extractor.extract(offer, records)
            result = scorer.score(features)
            scored.append(
                RankedOffer(
                    rank=0,
                    offer=offer,
                    score=result.score,
                    raw_score=result.raw,
                    features=features,
                    matched_quality_record_ids=tuple(
                        r.record_id for r in records if r is not None
                    ),
                    reasons=build_reasons(offer, records, profile),
                    price_insight=price_insight(
                        offer.price.amount, offer.price.currency, anchor
                    ),
                )
            )

        unmatched = sum(1 for recs in records_by_offer.values() if not any(recs))
        if unmatched:
            logger.debug(
                "%d of %d offers on %s have no quality data; using neutral defaults",
                unmatched,
                len(offers),
                route,
            )

        scored.sort(key=_sort_key)
        top = [
            ranked.model_copy(update={"rank": position})
            for position, ranked in enumerate(scored[:top_n], start=1)
        ]

        total_bookings = profile.total_bookings if profile else 0
        stage = PersonalizationStage.from_bookings(total_bookings)
        top_records = records_by_offer[top[0].offer.offer_id]
        return Recommendation(
            offers=tuple(top),
            total_scored=len(offers),
            returned=len(top),
            confidence=request_confidence,
            confidence_pct=round_half_up(request_confidence * 100),
            degraded=profile is None or request_confidence < LOW_CONFIDENCE,
            stage=stage,
            commentary=commentary(stage, total_bookings, top_records[0]),
        )

    def _match_quality(
        self, route: str, offer: Offer
    ) -> tuple[RouteQualityRecord | None, ...]:
        """Most specific quality record per segment; lookup failures count as none."""
        matched: list[RouteQualityRecord | None] = []
        for segment in offer.segments:
            try:
                records = self._quality.get_route_quality(
                    route, segment.airline_code, segment.flight_number
                )
            except Exception:
                logger.warning(
                    "Quality lookup failed for %s %s%s; scoring with neutral defaults",
                    route,
                    segment.airline_code,
                    segment.flight_number,
                    exc_info=True,
                )
                records = []
            matched.append(select_quality_record(records, route, segment))
        return tuple(matched)

    @staticmethod
    def _validate(route: str, offers: Sequence[Offer], top_n: int) -> str:
        if not offers:
            msg = "At least one offer is required"
            raise InvalidInput(msg)
        route = normalise_route(route)
        if not 1 <= top_n <= MAX_TOP_N:
            msg = f"top_n must be between 1 and {MAX_TOP_N}, got {top_n}"
            raise InvalidInput(msg)
        ids = [o.offer_id for o in offers]
        if len(set(ids)) != len(ids):
            msg = "Offer ids must be unique within a request"
            raise InvalidInput(msg)
        currencies = {o.price.currency for o in offers}
        if len(currencies) > 1:
            msg = f"Offers must share one currency, got {sorted(currencies)}"
            raise InvalidInput(msg)
        return route
