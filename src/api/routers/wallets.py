"""Wallet forensics endpoint — deployer analysis merged into the token score."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path, status

from config.settings import Settings
from src.api.dependencies import get_dexscreener, get_engine, get_helius, get_settings
from src.parsers.dexscreener.client import DexScreenerClient
from src.parsers.helius.client import HeliusClient
from src.parsers.token_scan import check_deployer
from src.parsers.wallet_forensics import WalletForensicsEngine

router = APIRouter(prefix="/api/v1/wallets", tags=["wallets"])

SOLANA_ADDRESS_PATTERN = "^[1-9A-HJ-NP-Za-km-z]{32,44}$"


@router.get("/{address}/forensics")
async def get_wallet_forensics(
    address: str = Path(..., pattern=SOLANA_ADDRESS_PATTERN),
    dex: DexScreenerClient = Depends(get_dexscreener),
    helius: HeliusClient = Depends(get_helius),
    engine: WalletForensicsEngine = Depends(get_engine),
    cfg: Settings = Depends(get_settings),
) -> dict[str, Any]:
    check = await check_deployer(
        dex,
        helius,
        engine,
        address,
        tx_limit=cfg.wallet_tx_limit,
        degrade_funding_failures=cfg.funding_lookup_degrade,
    )
    if check is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No pairs found for {address} on Solana DEXs; cannot determine deployer",
        )
    return {
        "forensics": check.forensics.to_dict(),
        "base_score": check.base_score.to_dict(),
        "adjusted_score": check.adjusted_score.to_dict(),
    }
