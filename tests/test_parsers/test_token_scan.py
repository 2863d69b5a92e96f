"""Tests for token lookup, discovery scan and deployer checks."""

from datetime import datetime

import pytest

from src.models.score import ScoreAction
from src.models.snapshot import MarketSnapshot, PeriodStats
from src.models.wallet import RiskLevel, WalletBalances
from src.parsers.dexscreener.models import DexScreenerPair
from src.parsers.exceptions import DexScreenerError
from src.parsers.helius.models import HeliusNativeTransfer, HeliusTransaction
from src.parsers.token_scan import (
    check_deployer,
    filter_high_potential,
    pick_best_pair,
    scan_high_potential,
    score_contract,
    search_and_score,
)

MINT = "Mint1111111111111111111111111111111111111"
MIXER = "MixerWa11et1111111111111111111111111111111"


def _pair(
    pair_address: str,
    *,
    chain: str = "solana",
    liquidity: float = 0,
    volume: float = 0,
    market_cap: float = 0,
) -> DexScreenerPair:
    return DexScreenerPair.model_validate({
        "chainId": chain,
        "pairAddress": pair_address,
        "baseToken": {"address": MINT, "name": "Foo", "symbol": "FOO"},
        "liquidity": {"usd": liquidity},
        "volume": {"h24": volume},
        "marketCap": market_cap,
    })


def _snap(pair_address: str, **kwargs) -> MarketSnapshot:
    return _pair(pair_address, **kwargs).to_snapshot()


class FakeDex:
    def __init__(
        self,
        *,
        pairs: list[DexScreenerPair] | None = None,
        trending: list[DexScreenerPair] | Exception | None = None,
        boosted: list[DexScreenerPair] | Exception | None = None,
    ) -> None:
        self.pairs = pairs or []
        self.trending = trending or []
        self.boosted = boosted or []

    async def get_token_pairs(self, chain: str, address: str) -> list[DexScreenerPair]:
        return self.pairs

    async def search(self, query: str) -> list[DexScreenerPair]:
        return self.pairs

    async def get_trending(self) -> list[DexScreenerPair]:
        if isinstance(self.trending, Exception):
            raise self.trending
        return self.trending

    async def get_boosted(self) -> list[DexScreenerPair]:
        if isinstance(self.boosted, Exception):
            raise self.boosted
        return self.boosted


class FakeHelius:
    def __init__(self, transfers=None) -> None:
        self.transfers = transfers or []

    async def get_balances(self, address: str) -> WalletBalances:
        return WalletBalances()

    async def get_transactions(self, address: str, *, limit: int = 100, tx_type=None):
        return self.transfers if tx_type == "TRANSFER" else []


def test_pick_best_pair_by_liquidity():
    snaps = [_snap("A", liquidity=10), _snap("B", liquidity=500), _snap("C", liquidity=50)]
    assert pick_best_pair(snaps).pair_address == "B"
    assert pick_best_pair([]) is None


class TestFilterHighPotential:
    def test_minimums_inclusive(self) -> None:
        snaps = [
            _snap("ok", liquidity=100_000, volume=50_000, market_cap=500_000),
            _snap("thin", liquidity=99_999, volume=50_000, market_cap=500_000),
            _snap("quiet", liquidity=100_000, volume=49_999, market_cap=500_000),
            _snap("tiny", liquidity=100_000, volume=50_000, market_cap=499_999),
        ]
        assert [s.pair_address for s in filter_high_potential(snaps)] == ["ok"]

    def test_dedupes_by_pair_address(self) -> None:
        snap = _snap("dup", liquidity=1e6, volume=1e6, market_cap=1e7)
        assert len(filter_high_potential([snap, snap, snap])) == 1

    def test_chain_filter(self) -> None:
        snaps = [
            _snap("sol", liquidity=1e6, volume=1e6, market_cap=1e7),
            _snap("eth", chain="ethereum", liquidity=1e6, volume=1e6, market_cap=1e7),
        ]
        result = filter_high_potential(snaps, chains=["ethereum"])
        assert [s.pair_address for s in result] == ["eth"]


@pytest.mark.asyncio
async def test_score_contract_uses_deepest_pair(fixed_now: datetime):
    dex = FakeDex(pairs=[_pair("shallow", liquidity=20_000), _pair("deep", liquidity=600_000)])
    result = await score_contract(dex, "solana", MINT, now=fixed_now)
    assert result is not None
    assert result.pair_address == "deep"
    assert result.breakdown[0].score == 25


@pytest.mark.asyncio
async def test_score_contract_no_pairs():
    assert await score_contract(FakeDex(), "solana", MINT) is None


@pytest.mark.asyncio
async def test_search_and_score_filters_and_sorts(fixed_now: datetime):
    dex = FakeDex(pairs=[
        _pair("low", liquidity=1_000),
        _pair("eth", chain="ethereum", liquidity=900_000),
        _pair("high", liquidity=900_000, market_cap=20_000_000),
    ])
    results = await search_and_score(dex, "foo", chains=["solana"], now=fixed_now)
    assert [r.pair_address for r in results] == ["high", "low"]


@pytest.mark.asyncio
async def test_search_and_score_limit(fixed_now: datetime):
    dex = FakeDex(pairs=[_pair(f"p{i}") for i in range(5)])
    assert len(await search_and_score(dex, "foo", limit=2, now=fixed_now)) == 2


class TestScanHighPotential:
    @pytest.mark.asyncio
    async def test_merges_both_feeds(self) -> None:
        good = {"liquidity": 200_000, "volume": 80_000, "market_cap": 800_000}
        dex = FakeDex(
            trending=[_pair("T1", **good), _pair("shared", **good), _pair("weak", liquidity=5)],
            boosted=[_pair("shared", **good), _pair("B1", **good)],
        )
        result = await scan_high_potential(dex)
        assert [s.pair_address for s in result] == ["T1", "shared", "B1"]

    @pytest.mark.asyncio
    async def test_one_feed_failing_is_tolerated(self) -> None:
        good = {"liquidity": 200_000, "volume": 80_000, "market_cap": 800_000}
        dex = FakeDex(
            trending=DexScreenerError("HTTP 503"),
            boosted=[_pair("B1", **good)],
        )
        result = await scan_high_potential(dex)
        assert [s.pair_address for s in result] == ["B1"]

    @pytest.mark.asyncio
    async def test_both_feeds_failing_yields_empty(self) -> None:
        dex = FakeDex(trending=DexScreenerError("down"), boosted=DexScreenerError("down"))
        assert await scan_high_potential(dex) == []


class TestCheckDeployer:
    @pytest.mark.asyncio
    async def test_mixer_funded_deployer_rejected(self, forensics_engine) -> None:
        strong = DexScreenerPair.model_validate({
            "chainId": "solana",
            "pairAddress": "P1",
            "baseToken": {"address": MINT},
            "liquidity": {"usd": 600_000},
            "marketCap": 12_000_000,
            "volume": {"h24": 1_200_000},
        })
        funding = HeliusTransaction(
            timestamp=1,
            native_transfers=[
                HeliusNativeTransfer(from_user_account=MIXER, to_user_account=MINT, amount=10),
            ],
        )
        check = await check_deployer(FakeDex(pairs=[strong]), FakeHelius([funding]), forensics_engine, MINT)

        assert check is not None
        assert check.base_score.total_score > 0
        assert check.adjusted_score.total_score == 0
        assert check.adjusted_score.action is ScoreAction.SKIP
        assert check.forensics.risk_level is RiskLevel.CRITICAL

    @pytest.mark.asyncio
    async def test_no_pairs(self, forensics_engine) -> None:
        assert await check_deployer(FakeDex(), FakeHelius(), forensics_engine, MINT) is None

    @pytest.mark.asyncio
    async def test_clean_wallet_adds_bonus(self, forensics_engine) -> None:
        dex = FakeDex(pairs=[_pair("P1", liquidity=600_000)])
        check = await check_deployer(dex, FakeHelius(), forensics_engine, MINT)
        assert check.forensics.score_adjustment == 3
        assert check.adjusted_score.total_score == check.base_score.total_score + 3
        assert check.adjusted_score.catalysts[-1].name == "Wallet: WALLET_VERIFIED"
