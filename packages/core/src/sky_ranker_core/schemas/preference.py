"""Learned travel-preference profile, validated at the collaborator boundary."""

from __future__ import annotations

import math
from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .bounds import clamp, clamp_optional
from .enums import CabinClass, TimeBucket


def _upper_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).strip().upper(): v for k, v in value.items()}
    return value


def _finite_clamped(
    values: dict[str, Any], low: float, high: float
) -> dict[str, float]:
    """Clamp every value into [low, high], dropping NaN entries."""
    kept: dict[str, float] = {}
    for key, raw in values.items():
        value = clamp_optional(raw, low, high)
        if value is not None:
            kept[key] = value
    return kept


def _positive_weights(weights: dict[Any, float]) -> dict[Any, float]:
    """Keep finite positive weights only; an all-zero map becomes empty."""
    kept: dict[Any, float] = {}
    for key, weight in weights.items():
        weight = clamp(weight, 0.0, math.inf)
        if 0 < weight < math.inf:
            kept[key] = weight
    return kept


class ComfortPrefs(BaseModel):
    """Cabin-class weights and amenity (pitch / connectivity) importance."""

    model_config = ConfigDict(frozen=True)

    cabin_weights: dict[CabinClass, float] = Field(default_factory=dict)
    amenity_importance: float = 0.0

    @field_validator("cabin_weights", mode="before")
    @classmethod
    def _normalise_cabin_keys(cls, value: Any) -> Any:
        return _upper_keys(value) if value is not None else {}

    @field_validator("cabin_weights")
    @classmethod
    def _drop_empty_cabins(
        cls, value: dict[CabinClass, float]
    ) -> dict[CabinClass, float]:
        return _positive_weights(value)

    @field_validator("amenity_importance", mode="before")
    @classmethod
    def _clamp_importance(cls, value: float | None) -> float:
        importance = clamp_optional(value, 0.0, 1.0)
        return 0.0 if importance is None else importance

    @property
    def cabin_concentration(self) -> float:
        """Share of the heaviest cabin weight; 0 when no cabin prefs."""
        if not self.cabin_weights:
            return 0.0
        return max(self.cabin_weights.values()) / sum(self.cabin_weights.values())


class PreferenceProfile(BaseModel):
    """A user's preference vector plus the metadata that backs it.

    Profiles arrive from an untrusted store, so every weight is clamped
    into its documented range here rather than trusted as stored.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    temporal_prefs: dict[TimeBucket, float] = Field(default_factory=dict)
    airline_prefs: dict[str, float] = Field(default_factory=dict)
    comfort_prefs: ComfortPrefs = Field(default_factory=ComfortPrefs)
    price_sensitivity: float = 0.5
    context_patterns: dict[str, float] = Field(default_factory=dict)
    price_anchors: dict[str, float] = Field(default_factory=dict)
    total_bookings: int = 0
    last_booking_at: datetime | None = None

    @field_validator("temporal_prefs", mode="before")
    @classmethod
    def _normalise_bucket_keys(cls, value: Any) -> Any:
        return _upper_keys(value) if value is not None else {}

    @field_validator("temporal_prefs")
    @classmethod
    def _renormalise_temporal(
        cls, value: dict[TimeBucket, float]
    ) -> dict[TimeBucket, float]:
        weights = _positive_weights(value)
        total = sum(weights.values())
        if total <= 0:
            return {}
        return {bucket: w / total for bucket, w in weights.items()}

    @field_validator("airline_prefs", mode="before")
    @classmethod
    def _clamp_affinities(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {} if value is None else value
        affinities = _finite_clamped(_upper_keys(value), -1.0, 1.0)
        if not any(affinities.values()):
            return {}
        return affinities

    @field_validator("comfort_prefs", mode="before")
    @classmethod
    def _default_comfort(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("price_sensitivity", mode="before")
    @classmethod
    def _clamp_sensitivity(cls, value: float | None) -> float:
        sensitivity = clamp_optional(value, 0.0, 1.0)
        return 0.5 if sensitivity is None else sensitivity

    @field_validator("context_patterns", mode="before")
    @classmethod
    def _clamp_context(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {} if value is None else value
        patterns = _finite_clamped({str(k): v for k, v in value.items()}, 0.0, 1.0)
        return patterns if any(patterns.values()) else {}

    @field_validator("price_anchors", mode="before")
    @classmethod
    def _positive_anchors(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {} if value is None else value
        anchors = _finite_clamped(_upper_keys(value), 0.0, math.inf)
        return {k: v for k, v in anchors.items() if 0 < v < math.inf}

    @field_validator("total_bookings", mode="before")
    @classmethod
    def _non_negative_bookings(cls, value: int | None) -> int:
        return 0 if value is None else max(0, int(value))

    @property
    def max_airline_affinity(self) -> float:
        """Largest affinity magnitude, positive or negative."""
        return max((abs(v) for v in self.airline_prefs.values()), default=0.0)

    @property
    def max_temporal_weight(self) -> float:
        return max(self.temporal_prefs.values(), default=0.0)
