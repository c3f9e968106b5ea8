"""Pydantic-compatible enums shared by the ranking schemas."""

from __future__ import annotations

from enum import StrEnum


class CabinClass(StrEnum):
    """Cabin class for a flight segment."""

    ECONOMY = "ECONOMY"
    PREMIUM_ECONOMY = "PREMIUM_ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"


class TimeBucket(StrEnum):
    """Departure time-of-day bucket, ordered from midnight."""

    RED_EYE = "RED_EYE"  # 00-05
    EARLY_MORNING = "EARLY_MORNING"  # 05-08
    MORNING = "MORNING"  # 08-12
    AFTERNOON = "AFTERNOON"  # 12-16
    EVENING = "EVENING"  # 16-20
    LATE_EVENING = "LATE_EVENING"  # 20-24

    @classmethod
    def from_hour(cls, hour: int) -> TimeBucket:
        """Map an hour of day (0-23) to its bucket."""
        for bucket, start, end in _BUCKET_HOURS:
            if start <= hour < end:
                return bucket
        msg = f"hour out of range: {hour}"
        raise ValueError(msg)

    @property
    def position(self) -> int:
        """Index of the bucket in day order, used for adjacency."""
        return list(TimeBucket).index(self)

    @property
    def label(self) -> str:
        return self.value.lower().replace("_", " ")


_BUCKET_HOURS: tuple[tuple[TimeBucket, int, int], ...] = (
    (TimeBucket.RED_EYE, 0, 5),
    (TimeBucket.EARLY_MORNING, 5, 8),
    (TimeBucket.MORNING, 8, 12),
    (TimeBucket.AFTERNOON, 12, 16),
    (TimeBucket.EVENING, 16, 20),
    (TimeBucket.LATE_EVENING, 20, 24),
)
