"""CLI for ranking offer fixtures without the HTTP app or a database."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import TypeAdapter, ValidationError

from sky_ranker_core.schemas import Offer, PreferenceProfile, RouteQualityRecord
from sky_ranker_ml.collaborators import (
    InMemoryProfileStore,
    InMemoryRouteQualityRepository,
)
from sky_ranker_ml.engine import RecommendationEngine, RecommendationRequest
from sky_ranker_ml.exceptions import InvalidInput
from sky_ranker_ml.explain import airline_name
from sky_ranker_ml.weights import DEFAULT_TOP_N

if TYPE_CHECKING:
    from sky_ranker_ml.recommendation import Recommendation

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

_offers_adapter = TypeAdapter(list[Offer])
_quality_adapter = TypeAdapter(list[RouteQualityRecord])


def _read_json(path: str) -> object:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _print_recommendation(recommendation: Recommendation) -> None:
    click.echo(
        f"\nRanked {recommendation.total_scored} offer(s), "
        f"showing {recommendation.returned} | "
        f"confidence {recommendation.confidence_pct}% | "
        f"{recommendation.stage.value.lower()}"
        + (" (degraded)" if recommendation.degraded else "")
    )
    if recommendation.commentary:
        click.echo(recommendation.commentary)
    click.echo("")
    for ranked in recommendation.offers:
        offer = ranked.offer
        click.echo(
            f"  {ranked.rank}. [{ranked.score:>3}] {offer.offer_id} | "
            f"{airline_name(offer.primary_carrier)} | "
            f"{offer.departure_time:%H:%M} | {offer.duration_minutes}min | "
            f"{offer.stops} stop(s) | {offer.price.amount:,.0f} {offer.price.currency}"
        )
        for reason in ranked.reasons:
            click.echo(f"       - {reason}")
        if ranked.price_insight:
            click.echo(f"       $ {ranked.price_insight}")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose: bool) -> None:
    """Sky Ranker CLI."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command("rank")
@click.argument("offers_json", type=click.Path(exists=True, dir_okay=False))
@click.option("--route", required=True, help="Route, e.g. BLR-DEL")
@click.option(
    "--profile",
    "profile_json",
    type=click.Path(exists=True, dir_okay=False),
    help="Preference profile JSON",
)
@click.option(
    "--quality",
    "quality_json",
    type=click.Path(exists=True, dir_okay=False),
    help="Route quality records JSON (list)",
)
@click.option("--top-n", type=int, help=f"Offers to show [default: {DEFAULT_TOP_N}]")
@click.option(
    "--by-stage",
    is_flag=True,
    help="Shortlist size follows the traveller's stage (5/3/1)",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def rank(
    offers_json: str,
    route: str,
    profile_json: str | None,
    quality_json: str | None,
    top_n: int | None,
    by_stage: bool,
    json_output: bool,
) -> None:
    """Rank the offers in OFFERS_JSON for a route."""
    try:
        offers = _offers_adapter.validate_python(_read_json(offers_json))
        profile = (
            PreferenceProfile.model_validate(_read_json(profile_json))
            if profile_json
            else None
        )
        records = (
            _quality_adapter.validate_python(_read_json(quality_json))
            if quality_json
            else []
        )
    except (json.JSONDecodeError, ValidationError) as exc:
        click.echo(f"Error: could not load input: {exc}", err=True)
        sys.exit(2)

    engine = RecommendationEngine(
        InMemoryProfileStore([profile] if profile is not None else []),
        InMemoryRouteQualityRepository(records),
        top_n_by_stage=by_stage,
    )
    request = RecommendationRequest(
        user_id=(profile.user_id if profile is not None else "") or "anonymous",
        route=route,
        offers=tuple(offers),
    )
    try:
        recommendation = engine.recommend(request, top_n=top_n)
    except InvalidInput as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(recommendation.model_dump(mode="json"), indent=2))
    else:
        _print_recommendation(recommendation)


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the recommendations API with uvicorn."""
    import uvicorn

    uvicorn.run("sky_ranker_api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
