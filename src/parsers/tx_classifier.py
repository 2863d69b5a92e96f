"""Free-text transaction heuristics used by wallet forensics.

Helius descriptions are human-readable sentences ("X sold 1000 FOO for
2 SOL"), so activity is classified by substring match. Kept separate from
the rule engine so it can be swapped for a structured taxonomy.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from src.models.wallet import WalletTransaction

CREATE_TYPES = frozenset({"CREATE"})
CREATE_PHRASES = ("created", "initialize mint")
SELL_TYPE = "SWAP"
SELL_PHRASE = "sold"
DUMP_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class DumpPattern:
    """Sell share of the wallet's recent transactions."""

    recent_count: int
    sell_count: int
    dump_percent: float
    is_dumping: bool


def is_token_creation(tx: WalletTransaction) -> bool:
    description = tx.description.lower()
    return tx.type in CREATE_TYPES or any(p in description for p in CREATE_PHRASES)


def is_sell(tx: WalletTransaction) -> bool:
    return tx.type == SELL_TYPE and SELL_PHRASE in tx.description.lower()


def count_token_creations(transactions: list[WalletTransaction]) -> int:
    return sum(1 for tx in transactions if is_token_creation(tx))


def dump_pattern(
    transactions: list[WalletTransaction],
    *,
    now: datetime | None = None,
) -> DumpPattern:
    """Dumping = more than half of last-7-day transactions are sells, at least 3."""
    now = now or datetime.now(UTC)
    cutoff = (now - DUMP_WINDOW).timestamp()

    recent = [tx for tx in transactions if tx.timestamp > cutoff]
    sells = sum(1 for tx in recent if is_sell(tx))
    dump_percent = sells / len(recent) * 100 if recent else 0.0

    return DumpPattern(
        recent_count=len(recent),
        sell_count=sells,
        dump_percent=dump_percent,
        is_dumping=dump_percent > 50 and sells >= 3,
    )
