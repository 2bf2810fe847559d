"""Liveness check."""

from datetime import datetime
from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from blog.config import Environment, Settings
from blog.util.clock import Clock
from blog.util.observability import SERVICE_NAME

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: Literal["healthy"]
    service: str
    environment: Environment
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], clock: FromDishka[Clock]
) -> HealthResponse:
    """Report that the process is serving requests. Touches no database."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        environment=settings.environment,
        timestamp=clock.now(),
    )
