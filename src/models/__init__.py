from src.models.score import (
    CatalystAdjustment,
    ListingReadiness,
    ListingVerdict,
    ScoreAction,
    ScoreBreakdown,
    TokenScore,
)
from src.models.snapshot import MarketSnapshot, PeriodStats, PeriodTxns, SocialPresence, TokenIdentity, TxnCount
from src.models.wallet import (
    RiskLevel,
    WalletBalances,
    WalletFlag,
    WalletFlagDetail,
    WalletForensicsResult,
    WalletTransaction,
)

__all__ = [
    "MarketSnapshot",
    "TokenIdentity",
    "PeriodStats",
    "PeriodTxns",
    "TxnCount",
    "SocialPresence",
    "ScoreAction",
    "ScoreBreakdown",
    "CatalystAdjustment",
    "TokenScore",
    "ListingVerdict",
    "ListingReadiness",
    "WalletFlag",
    "RiskLevel",
    "WalletFlagDetail",
    "WalletTransaction",
    "WalletBalances",
    "WalletForensicsResult",
]
