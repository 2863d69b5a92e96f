"""Entry point for the token radar API.

Runs uvicorn inside the current event loop so the app's lifespan owns the
DexScreener and Helius clients.
"""

import asyncio

import uvicorn
from loguru import logger

from config.settings import Settings, settings
from src.api.app import create_app
from src.parsers.wallet_forensics import ForensicsConfig
from src.utils.logger import setup_logger


async def serve(cfg: Settings) -> None:
    config = uvicorn.Config(
        app=create_app(cfg),
        host=cfg.api_host,
        port=cfg.api_port,
        log_level="warning",
        loop="none",
    )
    logger.info(f"[API] Radar API starting on http://{cfg.api_host}:{cfg.api_port}")
    await uvicorn.Server(config).serve()


async def main() -> None:
    setup_logger(level="INFO")
    logger.info(
        f"Starting token radar (default chain={settings.default_chain}, "
        f"helius={'on' if settings.helius_api_key else 'off'}, "
        f"mixers={len(ForensicsConfig.from_settings(settings).mixer_addresses)})"
    )
    await serve(settings)
    logger.info("Shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
