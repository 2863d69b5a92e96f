"""FastAPI application factory for the token radar API."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from config.settings import Settings, settings as default_settings
from src.api.middleware import SecurityHeadersMiddleware
from src.parsers.dexscreener.client import DexScreenerClient
from src.parsers.exceptions import RetrievalError
from src.parsers.helius.client import HeliusClient
from src.parsers.wallet_forensics import ForensicsConfig, WalletForensicsEngine


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    cfg: Settings = app.state.settings
    app.state.dexscreener = DexScreenerClient(max_rps=cfg.dexscreener_max_rps)
    app.state.helius = (
        HeliusClient(cfg.helius_api_key, max_rps=cfg.helius_max_rps)
        if cfg.helius_api_key
        else None
    )
    if app.state.helius is None:
        logger.warning("[API] HELIUS_API_KEY not set; wallet forensics disabled")
    try:
        yield
    finally:
        await app.state.dexscreener.close()
        if app.state.helius is not None:
            await app.state.helius.close()


async def _retrieval_error_handler(request: Request, exc: RetrievalError) -> JSONResponse:
    logger.warning(f"[API] Upstream failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    cfg = settings or default_settings
    app = FastAPI(
        title="SolCex BD Token Radar API",
        version="0.1.0",
        docs_url="/api/docs" if os.getenv("API_DEBUG") else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if os.getenv("API_DEBUG") else None,
        lifespan=_lifespan,
    )
    app.state.settings = cfg
    app.state.forensics_engine = WalletForensicsEngine(ForensicsConfig.from_settings(cfg))

    # Rate limiting: keeps callers inside the DexScreener/Helius quotas
    app.state.limiter = Limiter(key_func=get_remote_address, default_limits=[cfg.api_rate_limit])
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_exception_handler(RetrievalError, _retrieval_error_handler)

    from src.api.routers.health import router as health_router
    from src.api.routers.tokens import router as tokens_router
    from src.api.routers.wallets import router as wallets_router

    app.include_router(health_router)
    app.include_router(tokens_router)
    app.include_router(wallets_router)

    return app
