"""Core schemas for Sky Ranker."""

from .bounds import clamp, clamp_optional
from .enums import CabinClass, TimeBucket
from .offer import FlightSegment, Offer, OfferPrice
from .preference import ComfortPrefs, PreferenceProfile
from .quality import RouteQualityRecord, Specificity

__all__ = [
    "CabinClass",
    "ComfortPrefs",
    "FlightSegment",
    "Offer",
    "OfferPrice",
    "PreferenceProfile",
    "RouteQualityRecord",
    "Specificity",
    "TimeBucket",
    "clamp",
    "clamp_optional",
]
