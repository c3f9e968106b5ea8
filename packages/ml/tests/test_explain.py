"""Reasons, price insight and commentary."""

from __future__ import annotations

import pytest

from sky_ranker_ml.explain import (
    airline_name,
    build_reasons,
    commentary,
    price_insight,
    quality_snippet,
)
from sky_ranker_ml.recommendation import PersonalizationStage


class TestReasons:
    def test_full_house_is_capped_at_four(self, make_offer, make_profile, make_record):
        profile = make_profile(
            temporal_prefs={"MORNING": 1.0}, airline_prefs={"6E": 0.8}
        )
        record = make_record("q", airline="6E", on_time=91, pitch=32, wifi=True)
        reasons = build_reasons(make_offer("A", 5000), [record], profile)
        assert reasons == (
            "Departs in your preferred morning window",
            "Your preferred airline: IndiGo",
            "Non-stop flight",
            "91% on-time",
        )

    def test_avoided_airline_is_flagged(self, make_offer, make_profile):
        profile = make_profile(airline_prefs={"SG": -0.7})
        offer = make_offer("A", 5000, airline="SG", stops=2)
        reasons = build_reasons(offer, [None, None, None], profile)
        assert reasons == (
            "Note: you usually avoid SpiceJet",
            "2 stops, longer travel time",
        )

    def test_cold_start_reasons_need_no_profile(self, make_offer, make_record):
        record = make_record("q", airline="6E", on_time=70, pitch=30, wifi=True)
        assert build_reasons(make_offer("A", 5000), [record], None) == (
            "Non-stop flight",
            "Wi-Fi available",
        )

    def test_on_time_reason_uses_worst_segment(self, make_offer, make_record):
        offer = make_offer("A", 5000, stops=1)
        records = [
            make_record("q1", airline="6E", flight="2031", on_time=95),
            make_record("q2", airline="6E", flight="20311", on_time=78),
        ]
        assert build_reasons(offer, records, None) == ()


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (5000, "₹1,000 less than usual, a great deal"),
        (6100, "About what you normally pay"),
        (8000, "₹2,000 more than usual, prices are high"),
        (6600, "₹600 more than your average"),
        (5500, "₹500 below your average"),
    ],
)
def test_price_insight(amount, expected):
    assert price_insight(amount, "INR", 6000) == expected


def test_price_insight_without_anchor():
    assert price_insight(5000, "INR", None) is None


def test_price_insight_unknown_currency():
    assert price_insight(50, "CHF", 100) == "50 CHF less than usual, a great deal"


def test_airline_name_falls_back_to_code():
    assert airline_name("6E") == "IndiGo"
    assert airline_name("ZZ") == "ZZ"


class TestCommentary:
    def test_discovery_is_silent(self):
        assert commentary(PersonalizationStage.DISCOVERY, 1, None) is None

    def test_learning(self, make_record):
        record = make_record("q", on_time=87, pitch=32, wifi=True)
        assert commentary(PersonalizationStage.LEARNING, 4, record) == (
            "Still getting to know your preferences; here's my top pick. "
            '87% on-time, Wi-Fi available, 32" seat pitch.'
        )

    def test_autopilot(self):
        assert commentary(PersonalizationStage.AUTOPILOT, 12, None) == (
            "Based on 12 bookings, this is your best match."
        )

    @pytest.mark.parametrize(
        ("bookings", "stage"),
        [
            (0, PersonalizationStage.DISCOVERY),
            (2, PersonalizationStage.DISCOVERY),
            (3, PersonalizationStage.LEARNING),
            (6, PersonalizationStage.AUTOPILOT),
        ],
    )
    def test_stage_thresholds(self, bookings, stage):
        assert PersonalizationStage.from_bookings(bookings) is stage


def test_quality_snippet_skips_unremarkable(make_record):
    assert quality_snippet(make_record("q", on_time=60, pitch=29)) is None
    assert quality_snippet(None) is None
