"""Normalized market view of one trading pair.

Every numeric field defaults to 0 so scoring never sees a missing value.
The only optional field is the pair creation timestamp, which maps to the
unknown-age sentinel during scoring.
"""

from dataclasses import dataclass, field

UNKNOWN_AGE_DAYS = -1
MS_PER_DAY = 1000 * 60 * 60 * 24


@dataclass(frozen=True)
class TokenIdentity:
    address: str = ""
    name: str = ""
    symbol: str = ""


@dataclass(frozen=True)
class PeriodStats:
    """A numeric metric bucketed by DexScreener time window."""

    m5: float = 0.0
    h1: float = 0.0
    h6: float = 0.0
    h24: float = 0.0


@dataclass(frozen=True)
class TxnCount:
    buys: int = 0
    sells: int = 0


@dataclass(frozen=True)
class PeriodTxns:
    m5: TxnCount = field(default_factory=TxnCount)
    h1: TxnCount = field(default_factory=TxnCount)
    h6: TxnCount = field(default_factory=TxnCount)
    h24: TxnCount = field(default_factory=TxnCount)


@dataclass(frozen=True)
class SocialPresence:
    website_count: int = 0
    social_link_count: int = 0

    @property
    def platform_count(self) -> int:
        return self.website_count + self.social_link_count


@dataclass(frozen=True)
class MarketSnapshot:
    chain_id: str = ""
    dex_id: str = ""
    pair_address: str = ""
    url: str = ""
    base_token: TokenIdentity = field(default_factory=TokenIdentity)
    quote_token: TokenIdentity = field(default_factory=TokenIdentity)
    price_usd: float = 0.0
    liquidity_usd: float = 0.0
    market_cap_usd: float = 0.0  # marketCap, else FDV
    volume: PeriodStats = field(default_factory=PeriodStats)
    price_change: PeriodStats = field(default_factory=PeriodStats)  # percent
    txns: PeriodTxns = field(default_factory=PeriodTxns)
    pair_created_at: int | None = None  # unix ms
    socials: SocialPresence = field(default_factory=SocialPresence)

    def age_days(self, now_ms: int) -> int:
        """Whole days since pair creation, or UNKNOWN_AGE_DAYS."""
        if not self.pair_created_at:
            return UNKNOWN_AGE_DAYS
        return (now_ms - self.pair_created_at) // MS_PER_DAY
