"""FastAPI dependency injection — shared API clients and the forensics engine."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from config.settings import Settings
from src.parsers.dexscreener.client import DexScreenerClient
from src.parsers.helius.client import HeliusClient
from src.parsers.wallet_forensics import WalletForensicsEngine


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dexscreener(request: Request) -> DexScreenerClient:
    return request.app.state.dexscreener


def get_helius(request: Request) -> HeliusClient:
    """Helius client, or 503 when no API key is configured."""
    helius = getattr(request.app.state, "helius", None)
    if helius is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="HELIUS_API_KEY not configured; wallet forensics unavailable",
        )
    return helius


def get_engine(request: Request) -> WalletForensicsEngine:
    return request.app.state.forensics_engine
