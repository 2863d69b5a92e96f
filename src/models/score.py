"""Scoring value objects — factor breakdown, catalysts, composite score."""

from dataclasses import asdict, dataclass, field
from enum import Enum

MAX_SCORE = 100


class ScoreAction(str, Enum):
    HOT = "HOT"
    QUALIFIED = "QUALIFIED"
    WATCH = "WATCH"
    SKIP = "SKIP"


class ListingVerdict(str, Enum):
    REJECTED = "REJECTED"
    READY = "READY"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    NEEDS_WALLET_CHECK = "NEEDS_WALLET_CHECK"
    NOT_READY = "NOT_READY"


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score awarded for one weighted factor."""

    category: str
    weight: int  # percent of the 100-point total
    score: int
    max_score: int
    value: str  # display value, e.g. "$512,000"
    details: str


@dataclass(frozen=True)
class CatalystAdjustment:
    name: str
    points: int  # signed
    reason: str


@dataclass(frozen=True)
class TokenScore:
    contract_address: str
    chain: str
    token_name: str
    token_symbol: str
    total_score: int
    action: ScoreAction
    breakdown: tuple[ScoreBreakdown, ...]
    catalysts: tuple[CatalystAdjustment, ...]
    recommendation: str
    scored_at: str
    pair_address: str
    pair_url: str
    max_score: int = MAX_SCORE

    def to_dict(self) -> dict:
        data = asdict(self)
        data["action"] = self.action.value
        data["breakdown"] = [asdict(b) for b in self.breakdown]
        data["catalysts"] = [asdict(c) for c in self.catalysts]
        return data


@dataclass(frozen=True)
class ListingReadiness:
    verdict: ListingVerdict
    reason: str
    score: int
    wallet_checked: bool
    weak_factors: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "verdict": self.verdict.value,
            "reason": self.reason,
            "score": self.score,
            "wallet_checked": self.wallet_checked,
            "weak_factors": list(self.weak_factors),
        }
