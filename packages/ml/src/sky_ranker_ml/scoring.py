"""Offer scoring: profile-derived weights blended with a fixed baseline."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from sky_ranker_core.schemas import clamp
from sky_ranker_ml.weights import (
    AIRLINE_WEIGHT,
    BASELINE_WEIGHTS,
    COMFORT_WEIGHT,
    PRICE_WEIGHT_MIN,
    PRICE_WEIGHT_SPAN,
    TEMPORAL_WEIGHT,
)

if TYPE_CHECKING:
    from sky_ranker_core.schemas import PreferenceProfile
    from sky_ranker_ml.features import FeatureVector


class ScoreResult(BaseModel):
    """Score of one offer on the 0-100 scale."""

    model_config = ConfigDict(frozen=True)

    personalized: float
    baseline: float
    raw: float
    score: int


def normalise(weights: dict[str, float]) -> dict[str, float]:
    """Scale weights so they sum to 1."""
    total = sum(weights.values())
    return {name: w / total for name, w in weights.items()}


def personalized_weights(profile: PreferenceProfile | None) -> dict[str, float]:
    """Derive per-feature weights from a profile.

    Price weight grows with price sensitivity; airline, temporal and comfort
    weights follow the magnitude of their profile fields. Quality, duration
    and stops keep their baseline weights, so the result is never degenerate.
    """
    raw = {
        "duration": BASELINE_WEIGHTS["duration"],
        "stops": BASELINE_WEIGHTS["stops"],
        "quality": BASELINE_WEIGHTS["quality"],
        "price": PRICE_WEIGHT_MIN,
        "airline": 0.0,
        "temporal": 0.0,
        "comfort": 0.0,
    }
    if profile is not None:
        comfort = profile.comfort_prefs
        raw["price"] += PRICE_WEIGHT_SPAN * profile.price_sensitivity
        raw["airline"] = AIRLINE_WEIGHT * profile.max_airline_affinity
        raw["temporal"] = TEMPORAL_WEIGHT * profile.max_temporal_weight
        raw["comfort"] = COMFORT_WEIGHT * max(
            comfort.cabin_concentration, comfort.amenity_importance
        )
    return normalise(raw)


def weighted_sum(weights: dict[str, float], features: FeatureVector) -> float:
    return sum(w * getattr(features, name) for name, w in weights.items())


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class OfferScorer:
    """Scores offers for one request.

    ``final = c * personalized + (1 - c) * baseline`` with ``c`` the request
    confidence, so zero confidence reproduces the baseline ranking exactly.
    """

    def __init__(self, profile: PreferenceProfile | None, confidence: float) -> None:
        self._confidence = clamp(confidence, 0.0, 1.0)
        self._baseline = normalise(BASELINE_WEIGHTS)
        self._personalized = personalized_weights(profile)

    @property
    def weights(self) -> dict[str, float]:
        """Effective per-feature weights after the confidence blend."""
        c = self._confidence
        names = self._personalized.keys() | self._baseline.keys()
        return {
            name: c * self._personalized.get(name, 0.0)
            + (1.0 - c) * self._baseline.get(name, 0.0)
            for name in sorted(names)
        }

    def score(self, features: FeatureVector) -> ScoreResult:
        c = self._confidence
        personalized = weighted_sum(self._personalized, features)
        baseline = weighted_sum(self._baseline, features)
        raw = clamp((c * personalized + (1.0 - c) * baseline) * 100.0, 0.0, 100.0)
        return ScoreResult(
            personalized=personalized * 100.0,
            baseline=baseline * 100.0,
            raw=raw,
            score=round_half_up(raw),
        )


def score(
    features: FeatureVector, profile: PreferenceProfile | None, confidence: float
) -> ScoreResult:
    """Score a single feature vector; see :class:`OfferScorer`."""
    return OfferScorer(profile, confidence).score(features)
