"""Token discovery and lookup — fetch pairs from DexScreener, then score.

"No pairs found" is a normal outcome (None / empty list). Retrieval failures
propagate as RetrievalError, except in ``scan_high_potential`` where the
trending and boosted feeds are independent sources and one may fail alone.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from src.models.score import TokenScore
from src.models.snapshot import MarketSnapshot
from src.models.wallet import WalletForensicsResult
from src.parsers.dexscreener.client import DexScreenerClient
from src.parsers.dexscreener.models import DexScreenerPair
from src.parsers.helius.client import HeliusClient
from src.parsers.scoring import apply_wallet_adjustment, batch_score, score_token
from src.parsers.wallet_forensics import WalletForensicsEngine, analyze_wallet

DEFAULT_MIN_LIQUIDITY = 100_000
DEFAULT_MIN_VOLUME_24H = 50_000
DEFAULT_MIN_MARKET_CAP = 500_000


@dataclass(frozen=True)
class DeployerCheck:
    """Token score before and after deployer wallet forensics."""

    base_score: TokenScore
    adjusted_score: TokenScore
    forensics: WalletForensicsResult


def pick_best_pair(pairs: list[MarketSnapshot]) -> MarketSnapshot | None:
    """Highest-liquidity pair represents the token."""
    if not pairs:
        return None
    return max(pairs, key=lambda p: p.liquidity_usd)


def filter_high_potential(
    snapshots: list[MarketSnapshot],
    *,
    min_liquidity: float = DEFAULT_MIN_LIQUIDITY,
    min_volume_24h: float = DEFAULT_MIN_VOLUME_24H,
    min_market_cap: float = DEFAULT_MIN_MARKET_CAP,
    chains: list[str] | None = None,
) -> list[MarketSnapshot]:
    """Dedupe by pair address, then keep pairs meeting every minimum."""
    seen: set[str] = set()
    result: list[MarketSnapshot] = []
    for snap in snapshots:
        if snap.pair_address in seen:
            continue
        seen.add(snap.pair_address)
        if (
            snap.liquidity_usd >= min_liquidity
            and snap.volume.h24 >= min_volume_24h
            and snap.market_cap_usd >= min_market_cap
            and (not chains or snap.chain_id in chains)
        ):
            result.append(snap)
    return result


def _snapshots(pairs: list[DexScreenerPair]) -> list[MarketSnapshot]:
    return [p.to_snapshot() for p in pairs]


async def score_contract(
    dex: DexScreenerClient,
    chain: str,
    address: str,
    *,
    now: datetime | None = None,
) -> TokenScore | None:
    """Score a token by contract address; None when it has no pairs."""
    best = pick_best_pair(_snapshots(await dex.get_token_pairs(chain, address)))
    if best is None:
        logger.info(f"[SCAN] No pairs for {chain}:{address[:12]}")
        return None
    return score_token(best, now=now)


async def search_and_score(
    dex: DexScreenerClient,
    query: str,
    *,
    chains: list[str] | None = None,
    limit: int = 20,
    now: datetime | None = None,
) -> list[TokenScore]:
    snapshots = _snapshots(await dex.search(query))
    if chains:
        snapshots = [s for s in snapshots if s.chain_id in chains]
    return batch_score(snapshots[:limit], now=now)


async def scan_high_potential(
    dex: DexScreenerClient,
    *,
    min_liquidity: float = DEFAULT_MIN_LIQUIDITY,
    min_volume_24h: float = DEFAULT_MIN_VOLUME_24H,
    min_market_cap: float = DEFAULT_MIN_MARKET_CAP,
    chains: list[str] | None = None,
) -> list[MarketSnapshot]:
    """Trending + boosted tokens meeting the minimums."""
    trending, boosted = await asyncio.gather(
        dex.get_trending(),
        dex.get_boosted(),
        return_exceptions=True,
    )

    pairs: list[DexScreenerPair] = []
    for name, result in (("trending", trending), ("boosted", boosted)):
        if isinstance(result, BaseException):
            logger.warning(f"[SCAN] {name} feed failed: {result}")
            continue
        pairs.extend(result)

    candidates = filter_high_potential(
        _snapshots(pairs),
        min_liquidity=min_liquidity,
        min_volume_24h=min_volume_24h,
        min_market_cap=min_market_cap,
        chains=chains,
    )
    logger.info(f"[SCAN] {len(candidates)}/{len(pairs)} pairs passed minimums")
    return candidates


async def check_deployer(
    dex: DexScreenerClient,
    helius: HeliusClient,
    engine: WalletForensicsEngine,
    address: str,
    *,
    tx_limit: int = 100,
    degrade_funding_failures: bool = True,
) -> DeployerCheck | None:
    """Score a Solana token and merge forensics on its deployer.

    The token address stands in for the deployer until on-chain deployer
    resolution exists. Returns None when the token has no pairs.
    """
    base = await score_contract(dex, "solana", address)
    if base is None:
        return None

    forensics = await analyze_wallet(
        helius,
        engine,
        address,
        tx_limit=tx_limit,
        degrade_funding_failures=degrade_funding_failures,
    )
    return DeployerCheck(
        base_score=base,
        adjusted_score=apply_wallet_adjustment(base, forensics),
        forensics=forensics,
    )
