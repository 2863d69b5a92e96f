"""Health check reporting which data sources are configured."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    helius_configured: bool
    mixer_addresses: int
    institutional_addresses: int


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    state = request.app.state
    config = state.forensics_engine.config
    return HealthResponse(
        status="ok",
        version=request.app.version,
        helius_configured=bool(state.settings.helius_api_key),
        mixer_addresses=len(config.mixer_addresses),
        institutional_addresses=len(config.institutional_addresses),
    )
