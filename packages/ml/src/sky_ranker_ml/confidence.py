"""How much a preference profile should be trusted, as a 0-1 value."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sky_ranker_core.schemas import clamp
from sky_ranker_ml.weights import (
    RECENCY_DECAY_DAYS,
    RECENCY_FLOOR,
    RECENCY_WINDOW_DAYS,
    SAMPLE_SATURATION_BOOKINGS,
)

if TYPE_CHECKING:
    from sky_ranker_core.schemas import PreferenceProfile


def sample_factor(total_bookings: int) -> float:
    """Saturating trust in sample size: 0 at no bookings, approaching 1."""
    if total_bookings <= 0:
        return 0.0
    return 1.0 - math.exp(-total_bookings / SAMPLE_SATURATION_BOOKINGS)


def recency_factor(last_booking_at: datetime | None, now: datetime) -> float:
    """1.0 inside the recent window, then smooth decay toward a non-zero floor."""
    if last_booking_at is None:
        return RECENCY_FLOOR
    age_days = (_as_aware(now) - _as_aware(last_booking_at)).total_seconds() / 86400
    if age_days <= RECENCY_WINDOW_DAYS:
        return 1.0
    decay = math.exp(-(age_days - RECENCY_WINDOW_DAYS) / RECENCY_DECAY_DAYS)
    return RECENCY_FLOOR + (1.0 - RECENCY_FLOOR) * decay


def confidence(
    profile: PreferenceProfile | None, now: datetime | None = None
) -> float:
    """Product of the sample-size and recency factors, clamped to [0, 1].

    A missing profile is a pure cold start and yields exactly 0.
    """
    if profile is None:
        return 0.0
    now = now or datetime.now(UTC)
    value = sample_factor(profile.total_bookings) * recency_factor(
        profile.last_booking_at, now
    )
    return clamp(value, 0.0, 1.0)


def _as_aware(moment: datetime) -> datetime:
    # Naive timestamps from collaborators are taken as UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment
