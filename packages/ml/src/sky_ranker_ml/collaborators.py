"""Read-only collaborator interfaces and in-memory snapshots of them."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sky_ranker_core.schemas import PreferenceProfile, RouteQualityRecord


class PreferenceProfileStore(Protocol):
    """Source of learned preference profiles.

    Returns None for users without a profile; that is a normal state.
    """

    def get_preference_profile(self, user_id: str) -> PreferenceProfile | None: ...


class RouteQualityRepository(Protocol):
    """Source of curated route quality records.

    May return zero, one or several overlapping records for a query.
    """

    def get_route_quality(
        self,
        route: str,
        airline_code: str | None = None,
        flight_number: str | None = None,
    ) -> list[RouteQualityRecord]: ...


class InMemoryProfileStore:
    """Profile store backed by an already-resolved set of profiles."""

    def __init__(self, profiles: Iterable[PreferenceProfile] = ()) -> None:
        self._profiles = {p.user_id: p for p in profiles}

    def get_preference_profile(self, user_id: str) -> PreferenceProfile | None:
        return self._profiles.get(user_id)


class InMemoryRouteQualityRepository:
    """Quality repository backed by an already-resolved list of records."""

    def __init__(self, records: Iterable[RouteQualityRecord] = ()) -> None:
        self._by_route: dict[str, list[RouteQualityRecord]] = defaultdict(list)
        for record in records:
            self._by_route[record.route].append(record)

    def get_route_quality(
        self,
        route: str,
        airline_code: str | None = None,
        flight_number: str | None = None,
    ) -> list[RouteQualityRecord]:
        """Return every record compatible with the given keys."""
        matches: list[RouteQualityRecord] = []
        for record in self._by_route.get(route.upper(), []):
            if airline_code is not None and record.airline_code not in (
                None,
                airline_code.upper(),
            ):
                continue
            if flight_number is not None and record.flight_number not in (
                None,
                flight_number,
            ):
                continue
            matches.append(record)
        return matches
