"""Create the collaborator tables and load data/seed/*.json into them."""

from __future__ import annotations

import asyncio
import json
import os
from datetime import datetime
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sky_ranker_db.models import Base, RouteQuality, TravelPreference

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SEED_DIR = PROJECT_ROOT / "data" / "seed"


async def load_route_quality(session: AsyncSession) -> int:
    """Load route quality records, return count."""
    existing = (await session.execute(select(RouteQuality))).scalars().all()
    if existing:
        print(f"  Route quality already loaded ({len(existing)} rows), skipping.")
        return len(existing)

    with open(SEED_DIR / "route_quality.json") as f:
        data = json.load(f)

    for item in data:
        session.add(
            RouteQuality(
                record_id=item["record_id"],
                route=item["route"],
                airline_code=item.get("airline_code"),
                flight_number=item.get("flight_number"),
                on_time_pct=item.get("on_time_pct"),
                aircraft_type=item.get("aircraft_type"),
                seat_pitch_inches=item.get("seat_pitch_inches"),
                connectivity=item.get("connectivity", False),
                meal_rating=item.get("meal_rating"),
            )
        )

    await session.flush()
    print(f"  Loaded {len(data)} route quality records.")
    return len(data)


async def load_travel_preferences(session: AsyncSession) -> int:
    """Load demo preference profiles, return count."""
    existing = (await session.execute(select(TravelPreference))).scalars().all()
    if existing:
        print(f"  Preferences already loaded ({len(existing)} rows), skipping.")
        return len(existing)

    with open(SEED_DIR / "travel_preferences.json") as f:
        data = json.load(f)

    for item in data:
        last = item.get("last_booking_at")
        session.add(
            TravelPreference(
                user_id=item["user_id"],
                temporal_prefs=item.get("temporal_prefs"),
                airline_prefs=item.get("airline_prefs"),
                comfort_prefs=item.get("comfort_prefs"),
                price_sensitivity=item.get("price_sensitivity"),
                context_patterns=item.get("context_patterns"),
                price_anchors=item.get("price_anchors"),
                total_bookings=item.get("total_bookings", 0),
                last_booking_at=datetime.fromisoformat(last) if last else None,
            )
        )

    await session.flush()
    print(f"  Loaded {len(data)} preference profiles.")
    return len(data)


async def main() -> None:
    database_url = os.getenv(
        "DATABASE_URL",
        "postgresql+asyncpg://localhost:5432/sky_ranker",
    )
    engine = create_async_engine(database_url, echo=False)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    print("Seeding database...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with session_factory() as session, session.begin():
        print("[1/2] Route quality...")
        await load_route_quality(session)
        print("[2/2] Travel preferences...")
        await load_travel_preferences(session)

    await engine.dispose()
    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())
