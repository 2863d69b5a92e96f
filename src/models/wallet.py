"""Wallet forensics value objects."""

from dataclasses import asdict, dataclass
from enum import Enum

UNKNOWN_FUNDER = "UNKNOWN"


class WalletFlag(str, Enum):
    WALLET_VERIFIED = "WALLET_VERIFIED"
    INSTITUTIONAL = "INSTITUTIONAL"
    NET_POSITIVE = "NET_POSITIVE"
    SERIAL_CREATOR = "SERIAL_CREATOR"
    DUMP_ALERT = "DUMP_ALERT"
    MIXER_REJECT = "MIXER_REJECT"
    UNKNOWN = "UNKNOWN"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class WalletFlagDetail:
    flag: WalletFlag
    impact: int  # positive = bonus, negative = penalty
    reason: str


@dataclass(frozen=True)
class WalletTransaction:
    """Minimal transaction shape the rule engine needs."""

    type: str = "UNKNOWN"
    timestamp: int = 0  # unix seconds
    description: str = ""


@dataclass(frozen=True)
class WalletBalances:
    native_balance: float = 0.0  # SOL
    token_count: int = 0


@dataclass(frozen=True)
class WalletForensicsResult:
    deployer_address: str
    chain: str
    funded_by: str
    native_balance: float
    token_count: int
    recent_transactions: int
    flags: tuple[WalletFlagDetail, ...]
    score_adjustment: int
    risk_level: RiskLevel
    summary: str
    analyzed_at: str

    def has_flag(self, flag: WalletFlag) -> bool:
        return any(f.flag is flag for f in self.flags)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["risk_level"] = self.risk_level.value
        data["flags"] = [
            {"flag": f.flag.value, "impact": f.impact, "reason": f.reason}
            for f in self.flags
        ]
        return data
