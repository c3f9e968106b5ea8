"""Standalone ranking CLI."""

from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from sky_ranker_api.cli import cli


@pytest.fixture
def fixture_files(tmp_path, blr_del_payload):
    offers = tmp_path / "offers.json"
    offers.write_text(json.dumps(blr_del_payload), encoding="utf-8")
    quality = tmp_path / "quality.json"
    quality.write_text(
        json.dumps(
            [
                {
                    "record_id": "q-a",
                    "route": "BLR-DEL",
                    "airline_code": "6E",
                    "flight_number": "2031",
                    "on_time_pct": 80,
                },
                {
                    "record_id": "q-c",
                    "route": "BLR-DEL",
                    "airline_code": "AI",
                    "flight_number": "803",
                    "on_time_pct": 95,
                },
            ]
        ),
        encoding="utf-8",
    )
    profile = tmp_path / "profile.json"
    profile.write_text(
        json.dumps(
            {
                "user_id": "loyal",
                "airline_prefs": {"6E": 0.9},
                "price_sensitivity": 0.2,
                "total_bookings": 20,
                "last_booking_at": "2999-01-01T00:00:00Z",
            }
        ),
        encoding="utf-8",
    )
    return offers, quality, profile


def test_rank_table(fixture_files):
    offers, quality, _ = fixture_files
    result = CliRunner().invoke(
        cli, ["rank", str(offers), "--route", "BLR-DEL", "--quality", str(quality)]
    )
    assert result.exit_code == 0, result.output
    assert "Ranked 3 offer(s), showing 3" in result.output
    assert result.output.index(" B |") < result.output.index(" A |")
    assert "(degraded)" in result.output


def test_rank_json_with_profile(fixture_files):
    offers, quality, profile = fixture_files
    result = CliRunner().invoke(
        cli,
        [
            "rank",
            str(offers),
            "--route",
            "BLR-DEL",
            "--quality",
            str(quality),
            "--profile",
            str(profile),
            "--top-n",
            "2",
            "--json",
        ],
    )
    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["returned"] == 2
    assert body["offers"][0]["offer"]["offer_id"] == "A"
    assert "markup" not in result.stdout


def test_invalid_route_exits_non_zero(fixture_files):
    offers, _, _ = fixture_files
    result = CliRunner().invoke(cli, ["rank", str(offers), "--route", "BLR"])
    assert result.exit_code == 1
    assert "Malformed route" in result.output


def test_unreadable_offers_file(tmp_path):
    broken = tmp_path / "offers.json"
    broken.write_text("{not json", encoding="utf-8")
    result = CliRunner().invoke(cli, ["rank", str(broken), "--route", "BLR-DEL"])
    assert result.exit_code == 2


def test_rank_by_stage_shortlists_loyal_traveller(fixture_files):
    offers, quality, profile = fixture_files
    result = CliRunner().invoke(
        cli,
        [
            "rank",
            str(offers),
            "--route",
            "BLR-DEL",
            "--quality",
            str(quality),
            "--profile",
            str(profile),
            "--by-stage",
            "--json",
        ],
    )
    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["returned"] == 1
    assert body["stage"] == "AUTOPILOT"


def test_rank_without_profile_logs_degraded(fixture_files, caplog):
    offers, _, _ = fixture_files
    with caplog.at_level(logging.INFO, logger="sky_ranker_ml.engine"):
        result = CliRunner().invoke(cli, ["rank", str(offers), "--route", "BLR-DEL"])
    assert result.exit_code == 0, result.output
    assert "Degraded personalization for user anonymous" in caplog.text
