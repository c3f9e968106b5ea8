"""SQLAlchemy ORM models for Sky Ranker collaborators."""

from .base import Base, JSONType, TimestampMixin, UUIDPrimaryKeyMixin
from .preference import TravelPreference
from .route_quality import RouteQuality

__all__ = [
    "Base",
    "JSONType",
    "RouteQuality",
    "TimestampMixin",
    "TravelPreference",
    "UUIDPrimaryKeyMixin",
]
