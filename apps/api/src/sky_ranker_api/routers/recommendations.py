"""Recommendation router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sky_ranker_api.config import ApiSettings  # noqa: TC001
from sky_ranker_api.dependencies import get_db, get_settings
from sky_ranker_api.schemas.common import ErrorResponse
from sky_ranker_api.schemas.recommendations import (
    RecommendationCreate,
    RecommendationResponse,
)
from sky_ranker_api.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
SettingsDep = Annotated[ApiSettings, Depends(get_settings)]


@router.post(
    "",
    response_model=RecommendationResponse,
    responses={422: {"model": ErrorResponse}},
)
async def create_recommendation(
    request: RecommendationCreate,
    db: DbDep,
    settings: SettingsDep,
) -> RecommendationResponse:
    """Rank the given offers for the user, best match first."""
    service = RecommendationService(db, settings)
    return await service.recommend(request)
