"""Travel preference model - learned per-user profile."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin, UUIDPrimaryKeyMixin


class TravelPreference(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Travel preferences table - written by the learning process, read here.

    JSON columns hold raw weight maps; clamping and renormalisation happen
    when a row is turned into a ``PreferenceProfile``.
    """

    __tablename__ = "travel_preferences"

    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    temporal_prefs: Mapped[dict | None] = mapped_column(JSONType)
    airline_prefs: Mapped[dict | None] = mapped_column(JSONType)
    comfort_prefs: Mapped[dict | None] = mapped_column(JSONType)
    price_sensitivity: Mapped[float | None] = mapped_column(Float)
    context_patterns: Mapped[dict | None] = mapped_column(JSONType)
    price_anchors: Mapped[dict | None] = mapped_column(JSONType)
    total_bookings: Mapped[int] = mapped_column(Integer, default=0)
    last_booking_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<TravelPreference user_id={self.user_id}>"
