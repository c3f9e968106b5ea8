"""Scoring function and confidence blend."""

from __future__ import annotations

import pytest

from sky_ranker_ml.features import FeatureVector
from sky_ranker_ml.scoring import (
    OfferScorer,
    personalized_weights,
    round_half_up,
    score,
)
from sky_ranker_ml.weights import BASELINE_WEIGHTS


def _features(**overrides) -> FeatureVector:
    values = dict(
        price=0.5,
        duration=0.5,
        stops=0.5,
        temporal=0.5,
        airline=0.5,
        comfort=0.5,
        quality=0.5,
    )
    values.update(overrides)
    return FeatureVector(**values)


class TestWeights:
    def test_weights_sum_to_one(self, make_profile):
        profile = make_profile(
            airline_prefs={"6E": 0.7},
            temporal_prefs={"MORNING": 1},
            comfort_prefs={"amenity_importance": 0.4},
            price_sensitivity=0.9,
        )
        assert sum(personalized_weights(profile).values()) == pytest.approx(1.0)
        assert sum(personalized_weights(None).values()) == pytest.approx(1.0)

    def test_price_weight_grows_with_sensitivity(self, make_profile):
        frugal = personalized_weights(make_profile(price_sensitivity=1.0))
        relaxed = personalized_weights(make_profile(price_sensitivity=0.0))
        assert frugal["price"] > relaxed["price"]

    def test_airline_weight_follows_affinity_magnitude(self, make_profile):
        loyal = personalized_weights(make_profile(airline_prefs={"6E": -0.9}))
        indifferent = personalized_weights(make_profile())
        assert loyal["airline"] > 0
        assert indifferent["airline"] == 0

    def test_zero_confidence_uses_baseline_only(self, make_profile):
        scorer = OfferScorer(make_profile(airline_prefs={"6E": 1.0}), 0.0)
        weights = scorer.weights
        assert weights["airline"] == 0.0
        assert weights["temporal"] == 0.0
        for name, weight in BASELINE_WEIGHTS.items():
            assert weights[name] == pytest.approx(weight)


class TestScore:
    def test_range(self, make_profile):
        profile = make_profile(airline_prefs={"6E": 1.0})
        ones = FeatureVector(**dict.fromkeys(FeatureVector.model_fields, 1.0))
        zeros = FeatureVector(**dict.fromkeys(FeatureVector.model_fields, 0.0))
        best = score(ones, profile, 1.0)
        worst = score(zeros, profile, 1.0)
        assert best.score == 100
        assert worst.score == 0

    def test_cold_start_ignores_profile_features(self):
        a = score(_features(airline=1.0, temporal=1.0, comfort=1.0), None, 0.0)
        b = score(_features(airline=0.0, temporal=0.0, comfort=0.0), None, 0.0)
        assert a.raw == pytest.approx(b.raw)

    def test_blend_is_linear_in_confidence(self, make_profile):
        profile = make_profile(airline_prefs={"6E": 0.9}, price_sensitivity=0.2)
        features = _features(airline=0.95, price=0.3)
        result = score(features, profile, 0.25)
        expected = 0.25 * result.personalized + 0.75 * result.baseline
        assert result.raw == pytest.approx(expected)

    def test_confidence_clamped(self, make_profile):
        profile = make_profile(airline_prefs={"6E": 0.9})
        over = score(_features(airline=1.0), profile, 3.0)
        full = score(_features(airline=1.0), profile, 1.0)
        assert over.raw == pytest.approx(full.raw)


@pytest.mark.parametrize(
    ("value", "expected"), [(70.5, 71), (70.49, 70), (69.5, 70), (0.0, 0)]
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
