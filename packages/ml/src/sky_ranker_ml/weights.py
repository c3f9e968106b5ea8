"""Tunable constants for the offer ranking engine.

Every number that shapes a ranking lives here. Feature names used as dict
keys match the fields of :class:`sky_ranker_ml.features.FeatureVector`.
"""

from __future__ import annotations

# Profile-independent weights. Used alone for cold-start users and as the
# confidence-blend baseline for everyone else. All must stay non-zero.
BASELINE_WEIGHTS: dict[str, float] = {
    "price": 0.50,
    "duration": 0.08,
    "stops": 0.12,
    "quality": 0.30,
}

# Personalised raw weights (normalised together with the baseline features).
PRICE_WEIGHT_MIN = 0.10
PRICE_WEIGHT_SPAN = 0.60  # added at price_sensitivity == 1
AIRLINE_WEIGHT = 0.50  # scaled by the strongest airline affinity
TEMPORAL_WEIGHT = 0.30  # scaled by the heaviest time-bucket weight
COMFORT_WEIGHT = 0.20  # scaled by cabin concentration / amenity importance

# Price feature: discounts below the median earn more than premiums lose.
PRICE_BELOW_MEDIAN_SLOPE = 2.0
PRICE_ABOVE_MEDIAN_SLOPE = 0.4

NEUTRAL_FEATURE = 0.5
STOPS_FEATURE: dict[int, float] = {0: 1.0, 1: 0.5}  # two or more stops -> 0.0
TEMPORAL_ADJACENT_CREDIT = 0.5
AMENITY_SHARE = 0.5  # share of comfort given to amenities at importance 1.0
SEAT_PITCH_RANGE: tuple[float, float] = (28.0, 34.0)  # inches -> 0..1

# Confidence model.
SAMPLE_SATURATION_BOOKINGS = 4.0  # 1 - e^(-n/4): ~0.71 at 5, ~0.83 at 7
RECENCY_WINDOW_DAYS = 90
RECENCY_DECAY_DAYS = 180
RECENCY_FLOOR = 0.3
LOW_CONFIDENCE = 0.2

# Ranker.
DEFAULT_TOP_N = 10
MAX_TOP_N = 50

# Explanations.
MAX_REASONS = 4
PREFERRED_AIRLINE_AFFINITY = 0.5
ON_TIME_REASON_PCT = 80.0
SNIPPET_ON_TIME_PCT = 75.0
ROOMY_SEAT_PITCH = 31.0
STAGE_LEARNING_BOOKINGS = 3
STAGE_AUTOPILOT_BOOKINGS = 6
# Optional shortlist size per stage: fewer options as familiarity grows.
STAGE_TOP_N: dict[str, int] = {"DISCOVERY": 5, "LEARNING": 3, "AUTOPILOT": 1}
