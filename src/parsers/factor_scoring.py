"""Six weighted factor scorers for the 100-point token score.

Each scorer is a pure function of a MarketSnapshot. Threshold tables are
ordered highest first; the first tier whose lower bound is met wins and the
last entry is the default. Missing data is already 0 on the snapshot, so no
scorer can fail.
"""

from src.models.score import ScoreBreakdown
from src.models.snapshot import MarketSnapshot

WEIGHTS = {
    "liquidity": 25,
    "market_cap": 20,
    "volume_24h": 20,
    "social": 15,
    "age": 10,
    "team": 10,
}

# (min_value, score, details); min_value None marks the default tier
Tier = tuple[float | None, int, str]

LIQUIDITY_TIERS: tuple[Tier, ...] = (
    (500_000, 25, "Excellent liquidity"),
    (200_000, 20, "Good liquidity"),
    (100_000, 15, "Acceptable liquidity"),
    (50_000, 10, "Low liquidity - higher risk"),
    (None, 5, "Very low liquidity - caution"),
)

MARKET_CAP_TIERS: tuple[Tier, ...] = (
    (10_000_000, 20, "Strong market cap"),
    (1_000_000, 16, "Good market cap"),
    (500_000, 12, "Acceptable market cap"),
    (100_000, 8, "Small cap - early stage"),
    (None, 4, "Micro cap - high risk"),
)

VOLUME_TIERS: tuple[Tier, ...] = (
    (1_000_000, 20, "Excellent volume"),
    (500_000, 16, "Good volume"),
    (100_000, 12, "Moderate volume"),
    (50_000, 8, "Low volume"),
    (None, 4, "Very low volume"),
)

SOCIAL_TIERS: tuple[Tier, ...] = (
    (4, 15, "{n} platforms - strong presence"),
    (2, 10, "{n} platforms - moderate presence"),
    (1, 6, "{n} platform - minimal presence"),
    (None, 2, "No social links found"),
)


def _tier(value: float, tiers: tuple[Tier, ...]) -> tuple[int, str]:
    for min_value, score, details in tiers:
        if min_value is None or value >= min_value:
            return score, details
    # Unreachable while every table ends with a default tier
    return 0, ""


def _usd(value: float) -> str:
    return f"${value:,.0f}"


def score_liquidity(snapshot: MarketSnapshot) -> ScoreBreakdown:
    usd = snapshot.liquidity_usd
    score, details = _tier(usd, LIQUIDITY_TIERS)
    return ScoreBreakdown(
        category="Liquidity",
        weight=WEIGHTS["liquidity"],
        score=score,
        max_score=WEIGHTS["liquidity"],
        value=_usd(usd),
        details=details,
    )


def score_market_cap(snapshot: MarketSnapshot) -> ScoreBreakdown:
    mcap = snapshot.market_cap_usd
    score, details = _tier(mcap, MARKET_CAP_TIERS)
    return ScoreBreakdown(
        category="Market Cap",
        weight=WEIGHTS["market_cap"],
        score=score,
        max_score=WEIGHTS["market_cap"],
        value=_usd(mcap),
        details=details,
    )


def score_volume(snapshot: MarketSnapshot) -> ScoreBreakdown:
    vol = snapshot.volume.h24
    score, details = _tier(vol, VOLUME_TIERS)
    return ScoreBreakdown(
        category="Volume 24h",
        weight=WEIGHTS["volume_24h"],
        score=score,
        max_score=WEIGHTS["volume_24h"],
        value=_usd(vol),
        details=details,
    )


def score_social(snapshot: MarketSnapshot) -> ScoreBreakdown:
    platforms = snapshot.socials.platform_count
    score, details = _tier(platforms, SOCIAL_TIERS)
    return ScoreBreakdown(
        category="Social",
        weight=WEIGHTS["social"],
        score=score,
        max_score=WEIGHTS["social"],
        value=f"{platforms} platforms",
        details=details.format(n=platforms),
    )


def score_age(snapshot: MarketSnapshot, now_ms: int) -> ScoreBreakdown:
    """Age tiers use strict lower bounds, unlike the other factors."""
    days = snapshot.age_days(now_ms)

    if days > 180:
        score, details = 10, f"{days} days - established"
    elif days > 30:
        score, details = 8, f"{days} days - moderate history"
    elif days > 7:
        score, details = 5, f"{days} days - new"
    elif days >= 0:
        score, details = 3, f"{days} days - very new, higher risk"
    else:
        score, details = 2, "Age unknown"

    return ScoreBreakdown(
        category="Age",
        weight=WEIGHTS["age"],
        score=score,
        max_score=WEIGHTS["age"],
        value=f"{days} days" if days >= 0 else "Unknown",
        details=details,
    )


def score_team(snapshot: MarketSnapshot) -> ScoreBreakdown:
    # Heuristic: a website plus several socials suggests a reachable team
    websites = snapshot.socials.website_count
    socials = snapshot.socials.social_link_count

    if websites >= 1 and socials >= 2:
        score, details = 10, "Website + multiple socials - good transparency"
    elif websites >= 1 or socials >= 2:
        score, details = 7, "Some online presence"
    elif socials >= 1:
        score, details = 4, "Minimal online presence"
    else:
        score, details = 2, "No verifiable team info"

    return ScoreBreakdown(
        category="Team Transparency",
        weight=WEIGHTS["team"],
        score=score,
        max_score=WEIGHTS["team"],
        value=f"{websites} sites, {socials} socials",
        details=details,
    )


def score_factors(snapshot: MarketSnapshot, now_ms: int) -> tuple[ScoreBreakdown, ...]:
    """All six factors in display order."""
    return (
        score_liquidity(snapshot),
        score_market_cap(snapshot),
        score_volume(snapshot),
        score_social(snapshot),
        score_age(snapshot, now_ms),
        score_team(snapshot),
    )
