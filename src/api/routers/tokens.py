"""Token endpoints — search, scan, score, listing readiness."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status

from config.settings import Settings
from src.api.dependencies import get_dexscreener, get_engine, get_helius, get_settings
from src.parsers.dexscreener.client import DexScreenerClient
from src.parsers.scoring import assess_listing_readiness, batch_score
from src.parsers.token_scan import (
    check_deployer,
    scan_high_potential,
    score_contract,
    search_and_score,
)

router = APIRouter(prefix="/api/v1/tokens", tags=["tokens"])

CHAIN_PATTERN = "^[a-z0-9-]{2,20}$"


def _not_found(chain: str, address: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No trading pairs found for {address} on {chain}",
    )


@router.get("/search")
async def search_tokens(
    q: str = Query(..., min_length=1, max_length=100),
    chain: str | None = Query(None, pattern=CHAIN_PATTERN),
    dex: DexScreenerClient = Depends(get_dexscreener),
    cfg: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Keyword search across DEXs, scored and sorted."""
    scores = await search_and_score(
        dex, q, chains=[chain] if chain else None, limit=cfg.max_results_per_scan
    )
    return {"query": q, "count": len(scores), "items": [s.to_dict() for s in scores]}


@router.get("/scan")
async def scan_tokens(
    chain: str | None = Query(None, pattern=CHAIN_PATTERN),
    dex: DexScreenerClient = Depends(get_dexscreener),
    cfg: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Trending + boosted tokens passing the scan minimums, top N by score."""
    candidates = await scan_high_potential(
        dex,
        min_liquidity=cfg.scan_min_liquidity_usd,
        min_volume_24h=cfg.scan_min_volume_24h_usd,
        min_market_cap=cfg.scan_min_market_cap_usd,
        chains=[chain] if chain else None,
    )
    top = batch_score(candidates)[: cfg.scan_top_n]
    by_action: dict[str, int] = {}
    for s in top:
        by_action[s.action.value] = by_action.get(s.action.value, 0) + 1
    return {
        "chain": chain,
        "count": len(top),
        "by_action": by_action,
        "wallet_check_queue": [
            s.contract_address for s in top if s.total_score >= cfg.min_score_for_wallet_check
        ],
        "outreach_queue": [
            s.contract_address for s in top if s.total_score >= cfg.min_score_for_outreach
        ],
        "items": [s.to_dict() for s in top],
    }


@router.get("/{chain}/{address}/score")
async def get_token_score(
    chain: str = Path(..., pattern=CHAIN_PATTERN),
    address: str = Path(..., min_length=20, max_length=64),
    dex: DexScreenerClient = Depends(get_dexscreener),
) -> dict[str, Any]:
    result = await score_contract(dex, chain, address)
    if result is None:
        raise _not_found(chain, address)
    return result.to_dict()


@router.get("/{chain}/{address}/listing")
async def get_listing_readiness(
    request: Request,
    chain: str = Path(..., pattern=CHAIN_PATTERN),
    address: str = Path(..., min_length=20, max_length=64),
    forensics: bool = Query(False, description="Run deployer forensics first (Solana only)"),
    dex: DexScreenerClient = Depends(get_dexscreener),
    cfg: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Listing readiness verdict, optionally after wallet forensics."""
    if forensics:
        if chain != "solana":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Wallet forensics is only available for Solana tokens",
            )
        check = await check_deployer(
            dex,
            get_helius(request),
            get_engine(request),
            address,
            tx_limit=cfg.wallet_tx_limit,
            degrade_funding_failures=cfg.funding_lookup_degrade,
        )
        if check is None:
            raise _not_found(chain, address)
        readiness = assess_listing_readiness(check.adjusted_score, check.forensics)
        score = check.adjusted_score
    else:
        score = await score_contract(dex, chain, address)
        if score is None:
            raise _not_found(chain, address)
        readiness = assess_listing_readiness(score)

    return {"score": score.to_dict(), "readiness": readiness.to_dict()}
