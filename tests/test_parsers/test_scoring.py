"""Tests for the composite score, wallet adjustment and listing readiness."""

from dataclasses import replace
from datetime import datetime

import pytest

from src.models.score import ListingVerdict, ScoreAction
from src.models.snapshot import (
    MS_PER_DAY,
    MarketSnapshot,
    PeriodStats,
    PeriodTxns,
    SocialPresence,
    TokenIdentity,
    TxnCount,
)
from src.models.wallet import RiskLevel, WalletFlag, WalletFlagDetail, WalletForensicsResult
from src.parsers.scoring import (
    MIXER_REJECT_RECOMMENDATION,
    apply_wallet_adjustment,
    assess_listing_readiness,
    batch_score,
    get_action,
    get_recommendation,
    score_token,
    weak_factors,
)


def _make_snapshot(now: datetime, *, age_days: int | None = 200, **kwargs) -> MarketSnapshot:
    created = None
    if age_days is not None:
        created = int(now.timestamp() * 1000) - age_days * MS_PER_DAY
    defaults = {
        "chain_id": "solana",
        "pair_address": "Pair1111111111111111111111111111111111111",
        "url": "https://dexscreener.com/solana/pair1",
        "base_token": TokenIdentity("Mint111111111111111111111111111111111111", "Test Token", "TEST"),
        "pair_created_at": created,
    }
    defaults.update(kwargs)
    return MarketSnapshot(**defaults)


def _scenario_b(now: datetime) -> MarketSnapshot:
    return _make_snapshot(
        now,
        liquidity_usd=600_000,
        market_cap_usd=12_000_000,
        volume=PeriodStats(h24=1_200_000),
        txns=PeriodTxns(h24=TxnCount(buys=100, sells=10)),
        socials=SocialPresence(website_count=1, social_link_count=4),
    )


def _wallet(*flags: WalletFlagDetail, risk: RiskLevel = RiskLevel.LOW) -> WalletForensicsResult:
    return WalletForensicsResult(
        deployer_address="Mint111111111111111111111111111111111111",
        chain="solana",
        funded_by="UNKNOWN",
        native_balance=0.0,
        token_count=0,
        recent_transactions=0,
        flags=tuple(flags),
        score_adjustment=sum(f.impact for f in flags),
        risk_level=risk,
        summary="",
        analyzed_at="2026-01-15T12:00:00+00:00",
    )


MIXER_FLAG = WalletFlagDetail(WalletFlag.MIXER_REJECT, -100, "Funded by known mixer: MixerWa1...")


class TestGetAction:
    @pytest.mark.parametrize(
        ("score", "action"),
        [
            (100, ScoreAction.HOT),
            (85, ScoreAction.HOT),
            (84, ScoreAction.QUALIFIED),
            (70, ScoreAction.QUALIFIED),
            (69, ScoreAction.WATCH),
            (50, ScoreAction.WATCH),
            (49, ScoreAction.SKIP),
            (0, ScoreAction.SKIP),
        ],
    )
    def test_thresholds(self, score: int, action: ScoreAction) -> None:
        assert get_action(score) is action

    def test_every_action_has_recommendation(self) -> None:
        for action in ScoreAction:
            assert get_recommendation(action).startswith(action.value)


class TestScoreToken:
    def test_scenario_a_skip(self, fixed_now: datetime) -> None:
        snap = _make_snapshot(
            fixed_now,
            liquidity_usd=600_000,
            market_cap_usd=50_000,
            volume=PeriodStats(h24=40_000),
        )
        result = score_token(snap, now=fixed_now)

        assert [b.score for b in result.breakdown] == [25, 4, 4, 2, 10, 2]
        assert result.catalysts == ()
        assert result.total_score == 47
        assert result.action is ScoreAction.SKIP

    def test_scenario_b_hot_and_clamped(self, fixed_now: datetime) -> None:
        result = score_token(_scenario_b(fixed_now), now=fixed_now)

        assert sum(b.score for b in result.breakdown) == 100
        assert {c.name: c.points for c in result.catalysts} == {
            "Buy Pressure": 3,
            "Multi-Platform Presence": 5,
        }
        assert result.total_score == 100
        assert result.max_score == 100
        assert result.action is ScoreAction.HOT

    def test_negative_catalysts_clamp_at_zero(self, fixed_now: datetime) -> None:
        snap = _make_snapshot(
            fixed_now,
            age_days=None,
            price_change=PeriodStats(h24=-80),
            txns=PeriodTxns(h24=TxnCount(buys=1, sells=10)),
        )
        result = score_token(snap, now=fixed_now)
        # 19 base points, -15 catalysts
        assert result.total_score == 4
        assert 0 <= result.total_score <= 100

    def test_identity_fields(self, fixed_now: datetime) -> None:
        result = score_token(_scenario_b(fixed_now), now=fixed_now)
        assert result.contract_address == "Mint111111111111111111111111111111111111"
        assert result.token_symbol == "TEST"
        assert result.chain == "solana"
        assert result.pair_url == "https://dexscreener.com/solana/pair1"
        assert result.scored_at == fixed_now.isoformat()

    def test_idempotent_for_fixed_clock(self, fixed_now: datetime) -> None:
        snap = _scenario_b(fixed_now)
        assert score_token(snap, now=fixed_now) == score_token(snap, now=fixed_now)
        assert score_token(snap, now=fixed_now).to_dict() == score_token(snap, now=fixed_now).to_dict()

    def test_to_dict_is_flat_json(self, fixed_now: datetime) -> None:
        data = score_token(_scenario_b(fixed_now), now=fixed_now).to_dict()
        assert data["action"] == "HOT"
        assert data["breakdown"][0]["category"] == "Liquidity"
        assert isinstance(data["catalysts"], list)


def test_batch_score_sorted_descending(fixed_now: datetime):
    weak = _make_snapshot(fixed_now, liquidity_usd=10_000)
    strong = _scenario_b(fixed_now)
    middle = _make_snapshot(fixed_now, liquidity_usd=250_000, market_cap_usd=2_000_000)

    results = batch_score([weak, strong, middle], now=fixed_now)
    totals = [r.total_score for r in results]
    assert totals == sorted(totals, reverse=True)
    assert results[0].total_score == 100


class TestWalletAdjustment:
    def test_adds_wallet_catalysts_and_recomputes(self, fixed_now: datetime) -> None:
        base = score_token(
            _make_snapshot(fixed_now, liquidity_usd=600_000, market_cap_usd=50_000,
                           volume=PeriodStats(h24=40_000)),
            now=fixed_now,
        )
        wallet = _wallet(
            WalletFlagDetail(WalletFlag.INSTITUTIONAL, 8, "Linked to known institutional/VC wallet"),
            WalletFlagDetail(WalletFlag.WALLET_VERIFIED, 3, "No negative signals detected"),
        )
        adjusted = apply_wallet_adjustment(base, wallet)

        assert adjusted.total_score == 58
        assert adjusted.action is ScoreAction.WATCH
        assert [c.name for c in adjusted.catalysts[-2:]] == [
            "Wallet: INSTITUTIONAL", "Wallet: WALLET_VERIFIED",
        ]
        # original value untouched
        assert base.total_score == 47
        assert base.catalysts == ()

    def test_adjustment_clamps(self, fixed_now: datetime) -> None:
        base = score_token(_scenario_b(fixed_now), now=fixed_now)
        wallet = _wallet(WalletFlagDetail(WalletFlag.WALLET_VERIFIED, 3, "clean"))
        assert apply_wallet_adjustment(base, wallet).total_score == 100

    def test_scenario_c_mixer_override(self, fixed_now: datetime) -> None:
        base = score_token(_scenario_b(fixed_now), now=fixed_now)
        adjusted = apply_wallet_adjustment(base, _wallet(MIXER_FLAG, risk=RiskLevel.CRITICAL))

        assert adjusted.total_score == 0
        assert adjusted.action is ScoreAction.SKIP
        assert adjusted.recommendation == MIXER_REJECT_RECOMMENDATION

    def test_mixer_override_beats_positive_flags(self, fixed_now: datetime) -> None:
        """Even a hand-built result with large bonuses cannot outvote the mixer."""
        base = replace(score_token(_scenario_b(fixed_now), now=fixed_now), total_score=100)
        wallet = _wallet(
            WalletFlagDetail(WalletFlag.INSTITUTIONAL, 150, "bonus"),
            MIXER_FLAG,
        )
        adjusted = apply_wallet_adjustment(base, wallet)
        assert adjusted.total_score == 0
        assert adjusted.action is ScoreAction.SKIP


class TestListingReadiness:
    def test_weak_factors(self, fixed_now: datetime) -> None:
        snap = _make_snapshot(fixed_now, liquidity_usd=600_000, market_cap_usd=50_000,
                              volume=PeriodStats(h24=40_000))
        weak = weak_factors(score_token(snap, now=fixed_now))
        assert [w.split(":")[0] for w in weak] == [
            "Market Cap", "Volume 24h", "Social", "Team Transparency",
        ]

    def test_not_ready_below_minimum(self, fixed_now: datetime) -> None:
        score = score_token(_make_snapshot(fixed_now), now=fixed_now)
        result = assess_listing_readiness(score)
        assert result.verdict is ListingVerdict.NOT_READY
        assert result.weak_factors

    def test_needs_wallet_check(self, fixed_now: datetime) -> None:
        score = score_token(_scenario_b(fixed_now), now=fixed_now)
        result = assess_listing_readiness(score)
        assert result.verdict is ListingVerdict.NEEDS_WALLET_CHECK
        assert result.wallet_checked is False

    def test_ready_with_clean_wallet(self, fixed_now: datetime) -> None:
        score = score_token(_scenario_b(fixed_now), now=fixed_now)
        wallet = _wallet(WalletFlagDetail(WalletFlag.WALLET_VERIFIED, 3, "clean"))
        assert assess_listing_readiness(score, wallet).verdict is ListingVerdict.READY

    def test_needs_review_between_70_and_85(self, fixed_now: datetime) -> None:
        score = replace(score_token(_scenario_b(fixed_now), now=fixed_now), total_score=75)
        wallet = _wallet(WalletFlagDetail(WalletFlag.WALLET_VERIFIED, 3, "clean"))
        assert assess_listing_readiness(score, wallet).verdict is ListingVerdict.NEEDS_REVIEW

    @pytest.mark.parametrize(
        "flag", [WalletFlag.MIXER_REJECT, WalletFlag.DUMP_ALERT, WalletFlag.SERIAL_CREATOR]
    )
    def test_red_flags_reject(self, fixed_now: datetime, flag: WalletFlag) -> None:
        score = score_token(_scenario_b(fixed_now), now=fixed_now)
        wallet = _wallet(WalletFlagDetail(flag, -5, "bad"), risk=RiskLevel.MEDIUM)
        assert assess_listing_readiness(score, wallet).verdict is ListingVerdict.REJECTED
