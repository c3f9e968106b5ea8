"""Route quality model - curated on-time and comfort data."""

from __future__ import annotations

from sqlalchemy import Boolean, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class RouteQuality(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Route quality table - one row per route, airline or flight scope.

    Rows with neither airline nor flight number apply to the whole route;
    rows may overlap, the engine picks the most specific one.
    """

    __tablename__ = "route_quality"

    record_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    route: Mapped[str] = mapped_column(String(7), nullable=False)
    airline_code: Mapped[str | None] = mapped_column(String(3))
    flight_number: Mapped[str | None] = mapped_column(String(10))
    on_time_pct: Mapped[float | None] = mapped_column(Float)
    aircraft_type: Mapped[str | None] = mapped_column(String(50))
    seat_pitch_inches: Mapped[float | None] = mapped_column(Float)
    connectivity: Mapped[bool] = mapped_column(Boolean, default=False)
    meal_rating: Mapped[float | None] = mapped_column(Float)

    __table_args__ = (
        Index("ix_route_quality_route", "route"),
        Index("ix_route_quality_route_airline", "route", "airline_code"),
    )

    def __repr__(self) -> str:
        scope = " ".join(p for p in (self.airline_code, self.flight_number) if p)
        return f"<RouteQuality {self.route} {scope or '*'}>"
