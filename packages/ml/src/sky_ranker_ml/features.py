"""Feature extraction: offer + quality metadata -> normalised feature vector."""

from __future__ import annotations

import statistics
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from sky_ranker_core.schemas import ComfortPrefs, clamp
from sky_ranker_ml.weights import (
    AMENITY_SHARE,
    NEUTRAL_FEATURE,
    PRICE_ABOVE_MEDIAN_SLOPE,
    PRICE_BELOW_MEDIAN_SLOPE,
    SEAT_PITCH_RANGE,
    STOPS_FEATURE,
    TEMPORAL_ADJACENT_CREDIT,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sky_ranker_core.schemas import (
        CabinClass,
        FlightSegment,
        Offer,
        PreferenceProfile,
        RouteQualityRecord,
        TimeBucket,
    )


class FeatureVector(BaseModel):
    """Dimensionless per-offer features, each in [0, 1]."""

    model_config = ConfigDict(frozen=True)

    price: float
    duration: float
    stops: float
    temporal: float
    airline: float
    comfort: float
    quality: float


class CandidateSet(BaseModel):
    """Set-relative statistics, computed once per request."""

    model_config = ConfigDict(frozen=True)

    size: int
    median_price: float
    max_price: float
    min_duration: int
    max_duration: int

    @classmethod
    def from_offers(cls, offers: Sequence[Offer]) -> CandidateSet:
        durations = [o.duration_minutes for o in offers]
        return cls(
            size=len(offers),
            median_price=statistics.median(o.price.amount for o in offers),
            max_price=max(o.price.amount for o in offers),
            min_duration=min(durations),
            max_duration=max(durations),
        )


def select_quality_record(
    records: Sequence[RouteQualityRecord],
    route: str,
    segment: FlightSegment,
) -> RouteQualityRecord | None:
    """Pick the most specific record that applies to *segment*.

    Flight-level beats airline-level beats route-level; equal specificity
    falls back to the smallest record id so the choice is reproducible.
    """
    applicable = [
        r
        for r in records
        if r.applies_to(route, segment.airline_code, segment.flight_number)
    ]
    if not applicable:
        return None
    return min(applicable, key=lambda r: (-r.specificity, r.record_id))


class FeatureExtractor:
    """Builds feature vectors for offers of one request."""

    def __init__(
        self, candidates: CandidateSet, profile: PreferenceProfile | None
    ) -> None:
        self._candidates = candidates
        self._profile = profile

    def extract(
        self,
        offer: Offer,
        quality_records: Sequence[RouteQualityRecord | None],
    ) -> FeatureVector:
        """Extract features for *offer*.

        ``quality_records`` holds the matched record per segment (None where
        nothing matched), in segment order.
        """
        primary_record = quality_records[0] if quality_records else None
        return FeatureVector(
            price=self._score_price(offer.price.amount),
            duration=self._score_duration(offer.duration_minutes),
            stops=self._score_stops(offer.stops),
            temporal=self._score_temporal(offer.primary_segment.departure_bucket),
            airline=self._score_airline(offer.primary_carrier),
            comfort=self._score_comfort(
                offer.primary_segment.cabin_class, primary_record
            ),
            quality=self._score_quality(quality_records),
        )

    def _score_price(self, price: float) -> float:
        """Price relative to the candidate median; cheaper maps above 0.5."""
        if self._candidates.size < 2:
            return NEUTRAL_FEATURE
        median = self._candidates.median_price
        if median > 0:
            ratio = price / median
        else:
            # Free median: premiums are measured against the dearest offer.
            top = self._candidates.max_price
            if top <= 0:
                return NEUTRAL_FEATURE
            ratio = 1.0 + price / top
        if ratio <= 1.0:
            value = NEUTRAL_FEATURE + (1.0 - ratio) * PRICE_BELOW_MEDIAN_SLOPE
        else:
            value = NEUTRAL_FEATURE - (ratio - 1.0) * PRICE_ABOVE_MEDIAN_SLOPE
        return clamp(value, 0.0, 1.0)

    def _score_duration(self, duration: int) -> float:
        """Min-max normalisation: shortest=1.0, longest=0.0."""
        shortest = self._candidates.min_duration
        spread = self._candidates.max_duration - shortest
        if spread == 0:
            return NEUTRAL_FEATURE
        return 1.0 - (duration - shortest) / spread

    @staticmethod
    def _score_stops(stops: int) -> float:
        return STOPS_FEATURE.get(stops, 0.0)

    def _score_temporal(self, bucket: TimeBucket) -> float:
        """Relative weight of the departure bucket, with neighbour spillover."""
        prefs = self._profile.temporal_prefs if self._profile else {}
        if not prefs:
            return 0.0
        top = max(prefs.values())
        best = prefs.get(bucket, 0.0) / top
        for other, weight in prefs.items():
            if abs(other.position - bucket.position) == 1:
                best = max(best, TEMPORAL_ADJACENT_CREDIT * weight / top)
        return best

    def _score_airline(self, airline_code: str) -> float:
        """Affinity remapped from [-1, 1] to [0, 1]; unknown carriers are neutral."""
        prefs = self._profile.airline_prefs if self._profile else {}
        affinity = prefs.get(airline_code)
        if affinity is None:
            return NEUTRAL_FEATURE
        return (affinity + 1.0) / 2.0

    def _score_comfort(
        self, cabin_class: CabinClass, record: RouteQualityRecord | None
    ) -> float:
        comfort = self._profile.comfort_prefs if self._profile else ComfortPrefs()
        if comfort.cabin_weights:
            top = max(comfort.cabin_weights.values())
            cabin_match = comfort.cabin_weights.get(cabin_class, 0.0) / top
        else:
            cabin_match = NEUTRAL_FEATURE

        if record is None:
            return cabin_match

        amenities = [1.0 if record.connectivity else 0.0]
        if record.seat_pitch_inches is not None:
            low, high = SEAT_PITCH_RANGE
            amenities.append(
                clamp((record.seat_pitch_inches - low) / (high - low), 0.0, 1.0)
            )
        share = comfort.amenity_importance * AMENITY_SHARE
        return (1.0 - share) * cabin_match + share * statistics.fmean(amenities)

    @staticmethod
    def _score_quality(records: Sequence[RouteQualityRecord | None]) -> float:
        """Mean of on-time and meal ratings over segments that have data."""
        per_segment: list[float] = []
        for record in records:
            if record is None:
                continue
            parts: list[float] = []
            if record.on_time_pct is not None:
                parts.append(record.on_time_pct / 100.0)
            if record.meal_rating is not None:
                parts.append(record.meal_rating / 5.0)
            if parts:
                per_segment.append(statistics.fmean(parts))
        if not per_segment:
            return NEUTRAL_FEATURE
        return statistics.fmean(per_segment)
