"""Liveness and readiness routes."""

from datetime import datetime

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from canopy.config import Settings
from canopy.domain.repository import CommentRepository
from canopy.domain.value import EntityId
from canopy.util.time import utc_now

router = APIRouter(prefix="/health", tags=["health"], route_class=DishkaRoute)

# Entity that never has comments; counting it exercises the storage round trip
_HEALTH_ENTITY = EntityId("__health__")


class HealthResponse(BaseModel):
    """Service identity and status."""

    status: str
    timestamp: datetime
    git_sha: str
    environment: str


@router.get("", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Liveness: the process is up and serving."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_now(),
        git_sha=settings.git_sha,
        environment=settings.environment,
    )


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(
    settings: FromDishka[Settings],
    comment_repository: FromDishka[CommentRepository],
) -> HealthResponse:
    """Readiness: comment storage answers queries.

    Raises:
        HTTPException: 503 if storage is unreachable
    """
    try:
        await comment_repository.count_by_entity(_HEALTH_ENTITY)
    except Exception as e:
        logfire.error("Readiness check failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Comment storage unavailable",
        ) from e

    return HealthResponse(
        status="ready",
        timestamp=utc_now(),
        git_sha=settings.git_sha,
        environment=settings.environment,
    )
