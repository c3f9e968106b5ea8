"""FastAPI dependency injection providers."""

from __future__ import annotations

from sky_ranker_api.config import ApiSettings, settings
from sky_ranker_db.database import get_db as _db_dependency

# Re-export the DB dependency unchanged.
get_db = _db_dependency


def get_settings() -> ApiSettings:
    """Process-wide settings; overridable in tests."""
    return settings
