"""100-point token score — six weighted factors plus catalyst adjustments.

Also merges a wallet forensics result into an existing score and derives
listing readiness. Everything here is pure; ``now`` is the only input that
is not part of the snapshot, and passing it makes scoring reproducible.
"""

from dataclasses import replace
from datetime import UTC, datetime

from src.models.score import (
    MAX_SCORE,
    CatalystAdjustment,
    ListingReadiness,
    ListingVerdict,
    ScoreAction,
    TokenScore,
)
from src.models.snapshot import MarketSnapshot
from src.models.wallet import WalletFlag, WalletForensicsResult
from src.parsers.catalysts import detect_catalysts
from src.parsers.factor_scoring import score_factors

HOT_MIN = 85
QUALIFIED_MIN = 70
WATCH_MIN = 50

LISTING_MIN_SCORE = QUALIFIED_MIN
WEAK_FACTOR_SHARE = 0.6  # factor scoring below 60% of its max needs work

RECOMMENDATIONS = {
    ScoreAction.HOT: "HOT - Immediate outreach + wallet forensics recommended",
    ScoreAction.QUALIFIED: "QUALIFIED - Priority queue, run wallet forensics",
    ScoreAction.WATCH: "WATCH - Monitor for 48 hours",
    ScoreAction.SKIP: "SKIP - Below threshold, log only",
}
MIXER_REJECT_RECOMMENDATION = "AUTO-REJECTED - Deployer funded via mixer/tornado"

# Wallet flags that disqualify a token from listing outright
LISTING_RED_FLAGS = frozenset({
    WalletFlag.MIXER_REJECT,
    WalletFlag.DUMP_ALERT,
    WalletFlag.SERIAL_CREATOR,
})


def clamp_score(value: int) -> int:
    return max(0, min(MAX_SCORE, value))


def get_action(score: int) -> ScoreAction:
    if score >= HOT_MIN:
        return ScoreAction.HOT
    if score >= QUALIFIED_MIN:
        return ScoreAction.QUALIFIED
    if score >= WATCH_MIN:
        return ScoreAction.WATCH
    return ScoreAction.SKIP


def get_recommendation(action: ScoreAction) -> str:
    return RECOMMENDATIONS[action]


def score_token(snapshot: MarketSnapshot, *, now: datetime | None = None) -> TokenScore:
    """Score one pair snapshot.

    Identical snapshot + identical ``now`` always yields an identical result.
    """
    now = now or datetime.now(UTC)
    now_ms = int(now.timestamp() * 1000)

    breakdown = score_factors(snapshot, now_ms)
    catalysts = detect_catalysts(snapshot)

    base = sum(b.score for b in breakdown)
    total = clamp_score(base + sum(c.points for c in catalysts))
    action = get_action(total)

    return TokenScore(
        contract_address=snapshot.base_token.address,
        chain=snapshot.chain_id,
        token_name=snapshot.base_token.name,
        token_symbol=snapshot.base_token.symbol,
        total_score=total,
        action=action,
        breakdown=breakdown,
        catalysts=tuple(catalysts),
        recommendation=get_recommendation(action),
        scored_at=now.isoformat(),
        pair_address=snapshot.pair_address,
        pair_url=snapshot.url,
    )


def batch_score(
    snapshots: list[MarketSnapshot], *, now: datetime | None = None
) -> list[TokenScore]:
    """Score many snapshots, highest total first."""
    now = now or datetime.now(UTC)
    scores = [score_token(s, now=now) for s in snapshots]
    return sorted(scores, key=lambda s: s.total_score, reverse=True)


def apply_wallet_adjustment(
    token_score: TokenScore, wallet: WalletForensicsResult
) -> TokenScore:
    """Return a new score with the wallet flags merged in.

    A MIXER_REJECT flag overrides everything: score 0, SKIP.
    """
    wallet_catalysts = tuple(
        CatalystAdjustment(f"Wallet: {f.flag.value}", f.impact, f.reason)
        for f in wallet.flags
    )
    total = clamp_score(token_score.total_score + wallet.score_adjustment)
    action = get_action(total)
    recommendation = get_recommendation(action)

    if wallet.has_flag(WalletFlag.MIXER_REJECT):
        total = 0
        action = ScoreAction.SKIP
        recommendation = MIXER_REJECT_RECOMMENDATION

    return replace(
        token_score,
        total_score=total,
        action=action,
        recommendation=recommendation,
        catalysts=token_score.catalysts + wallet_catalysts,
    )


def weak_factors(token_score: TokenScore) -> list[str]:
    """Factors scoring under 60% of their maximum, formatted for a report."""
    return [
        f"{b.category}: {b.score}/{b.max_score} - {b.details}"
        for b in token_score.breakdown
        if b.score < b.max_score * WEAK_FACTOR_SHARE
    ]


def assess_listing_readiness(
    token_score: TokenScore,
    wallet: WalletForensicsResult | None = None,
) -> ListingReadiness:
    """Decide whether a scored token can go to a listing inquiry."""
    score = token_score.total_score
    checked = wallet is not None
    weak = tuple(weak_factors(token_score))

    if wallet is not None and any(f.flag in LISTING_RED_FLAGS for f in wallet.flags):
        verdict = ListingVerdict.REJECTED
        reason = "Red flags detected in wallet forensics. Do not proceed with listing inquiry."
    elif score >= HOT_MIN and checked:
        verdict = ListingVerdict.READY
        reason = "Token scores 85+ with clean wallet. Submit a listing inquiry."
    elif score >= LISTING_MIN_SCORE and checked:
        verdict = ListingVerdict.NEEDS_REVIEW
        reason = "Token qualifies (70+) but may need additional verification before outreach."
    elif score >= LISTING_MIN_SCORE:
        verdict = ListingVerdict.NEEDS_WALLET_CHECK
        reason = "Token scores 70+ but wallet forensics have not been run."
    else:
        verdict = ListingVerdict.NOT_READY
        reason = f"Scored {score}/100, below the {LISTING_MIN_SCORE}-point listing minimum."

    return ListingReadiness(
        verdict=verdict,
        reason=reason,
        score=score,
        wallet_checked=checked,
        weak_factors=weak,
    )
