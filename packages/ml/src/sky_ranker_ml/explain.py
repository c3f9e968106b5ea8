"""User-facing explanations for ranked offers.

Explanations only ever quote the total price; internal markup and service
fees are not visible here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sky_ranker_ml.recommendation import PersonalizationStage
from sky_ranker_ml.weights import (
    MAX_REASONS,
    ON_TIME_REASON_PCT,
    PREFERRED_AIRLINE_AFFINITY,
    ROOMY_SEAT_PITCH,
    SNIPPET_ON_TIME_PCT,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sky_ranker_core.schemas import Offer, PreferenceProfile, RouteQualityRecord

AIRLINE_NAMES: dict[str, str] = {
    "6E": "IndiGo",
    "AI": "Air India",
    "UK": "Vistara",
    "SG": "SpiceJet",
    "I5": "AirAsia India",
    "QP": "Akasa Air",
    "IX": "Air India Express",
}

CURRENCY_SYMBOLS: dict[str, str] = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}


def airline_name(code: str) -> str:
    return AIRLINE_NAMES.get(code, code)


def _money(amount: float, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency)
    rounded = f"{round(amount):,}"
    return f"{symbol}{rounded}" if symbol else f"{rounded} {currency}"


def build_reasons(
    offer: Offer,
    records: Sequence[RouteQualityRecord | None],
    profile: PreferenceProfile | None,
) -> tuple[str, ...]:
    """Short reasons why an offer is attractive (or worth a caveat)."""
    reasons: list[str] = []
    carrier = offer.primary_carrier

    if profile is not None and profile.temporal_prefs:
        favourite = max(
            profile.temporal_prefs, key=lambda b: (profile.temporal_prefs[b], b)
        )
        bucket = offer.primary_segment.departure_bucket
        if bucket == favourite:
            reasons.append(f"Departs in your preferred {bucket.label} window")

    if profile is not None:
        affinity = profile.airline_prefs.get(carrier)
        if affinity is not None and affinity >= PREFERRED_AIRLINE_AFFINITY:
            reasons.append(f"Your preferred airline: {airline_name(carrier)}")
        elif affinity is not None and affinity <= -PREFERRED_AIRLINE_AFFINITY:
            reasons.append(f"Note: you usually avoid {airline_name(carrier)}")

    if offer.stops == 0:
        reasons.append("Non-stop flight")
    elif offer.stops >= 2:
        reasons.append(f"{offer.stops} stops, longer travel time")

    matched = [r for r in records if r is not None]
    on_time = [r.on_time_pct for r in matched if r.on_time_pct is not None]
    if on_time and min(on_time) >= ON_TIME_REASON_PCT:
        reasons.append(f"{min(on_time):.0f}% on-time")

    primary = records[0] if records else None
    if primary is not None:
        if primary.connectivity:
            reasons.append("Wi-Fi available")
        pitch = primary.seat_pitch_inches
        if pitch is not None and pitch >= ROOMY_SEAT_PITCH:
            reasons.append(f'{pitch:g}" seat pitch')

    return tuple(reasons[:MAX_REASONS])


def price_insight(amount: float, currency: str, anchor: float | None) -> str | None:
    """Compare a fare with what the traveller usually pays on the route."""
    if not anchor or anchor <= 0:
        return None
    diff = amount - anchor
    gap = _money(abs(diff), currency)
    if diff <= -anchor * 0.15:
        return f"{gap} less than usual, a great deal"
    if abs(diff) < anchor * 0.05:
        return "About what you normally pay"
    if diff > anchor * 0.3:
        return f"{gap} more than usual, prices are high"
    if diff > 0:
        return f"{gap} more than your average"
    return f"{gap} below your average"


def quality_snippet(record: RouteQualityRecord | None) -> str | None:
    """e.g. '87% on-time, Wi-Fi available, 32" seat pitch.'"""
    if record is None:
        return None
    parts: list[str] = []
    on_time = record.on_time_pct
    if on_time is not None and on_time >= SNIPPET_ON_TIME_PCT:
        parts.append(f"{on_time:.0f}% on-time")
    if record.connectivity:
        parts.append("Wi-Fi available")
    pitch = record.seat_pitch_inches
    if pitch is not None and pitch >= ROOMY_SEAT_PITCH:
        parts.append(f'{pitch:g}" seat pitch')
    return ", ".join(parts) + "." if parts else None


def commentary(
    stage: PersonalizationStage,
    total_bookings: int,
    top_record: RouteQualityRecord | None,
) -> str | None:
    """Personalised one-liner for the top pick; none while still discovering."""
    if stage is PersonalizationStage.DISCOVERY:
        return None
    if stage is PersonalizationStage.AUTOPILOT:
        text = f"Based on {total_bookings} bookings, this is your best match."
    else:
        text = "Still getting to know your preferences; here's my top pick."
    snippet = quality_snippet(top_record)
    return f"{text} {snippet}" if snippet else text
