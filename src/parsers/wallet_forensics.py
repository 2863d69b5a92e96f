"""Deployer wallet forensics — rule engine plus concurrent data fetch.

The rule engine is pure: given a funding source, balances and a transaction
sample it emits an ordered flag list, the summed score adjustment and a risk
level. ``analyze_wallet`` fetches those inputs from Helius concurrently.

Failure policy: balance and transaction lookups propagate RetrievalError and
abort the evaluation. The funding-source lookup degrades to UNKNOWN unless
``degrade_funding_failures`` is False.
"""

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from loguru import logger

from config.settings import Settings
from src.models.wallet import (
    RiskLevel,
    UNKNOWN_FUNDER,
    WalletBalances,
    WalletFlag,
    WalletFlagDetail,
    WalletForensicsResult,
    WalletTransaction,
)
from src.parsers.funding_trace import find_funding_source
from src.parsers.helius.client import HeliusClient
from src.parsers.tx_classifier import count_token_creations, dump_pattern

SERIAL_CREATOR_MIN = 5  # strictly more than this many creations
NET_POSITIVE_MIN_SOL = 1.0

MIXER_IMPACT = -100
INSTITUTIONAL_IMPACT = 8
SERIAL_CREATOR_IMPACT = -5
DUMP_IMPACT = -10
HEAVY_DUMP_IMPACT = -15
HEAVY_DUMP_PCT = 70
NET_POSITIVE_IMPACT = 2
VERIFIED_IMPACT = 3

SUMMARIES = {
    RiskLevel.CRITICAL: "CRITICAL: Mixer-funded deployer. AUTO-REJECT.",
    RiskLevel.HIGH: "HIGH RISK: {flags}. Manual review required.",
    RiskLevel.MEDIUM: "MEDIUM RISK: {flags}. Proceed with caution.",
    RiskLevel.LOW: "LOW RISK: {flags}. Wallet appears clean.",
}


def _parse_addresses(raw: str) -> frozenset[str]:
    return frozenset(a.strip() for a in raw.split(",") if a.strip())


@dataclass(frozen=True)
class ForensicsConfig:
    """Known address sets, injected so they can change without a redeploy."""

    mixer_addresses: frozenset[str] = frozenset()
    institutional_addresses: frozenset[str] = frozenset()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ForensicsConfig":
        return cls(
            mixer_addresses=_parse_addresses(settings.mixer_addresses),
            institutional_addresses=_parse_addresses(settings.institutional_addresses),
        )

    @classmethod
    def from_addresses(
        cls,
        mixers: Iterable[str] = (),
        institutional: Iterable[str] = (),
    ) -> "ForensicsConfig":
        return cls(frozenset(mixers), frozenset(institutional))


def classify_risk(flags: Iterable[WalletFlagDetail]) -> RiskLevel:
    flags = list(flags)
    if any(f.flag is WalletFlag.MIXER_REJECT for f in flags):
        return RiskLevel.CRITICAL
    if any(f.flag is WalletFlag.DUMP_ALERT and f.impact <= HEAVY_DUMP_IMPACT for f in flags):
        return RiskLevel.HIGH
    if any(f.impact < 0 for f in flags):
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def summarize(risk: RiskLevel, flags: Iterable[WalletFlagDetail]) -> str:
    names = ", ".join(f.flag.value for f in flags)
    return SUMMARIES[risk].format(flags=names)


class WalletForensicsEngine:
    """Turns wallet history into flags, a score delta and a risk level."""

    def __init__(self, config: ForensicsConfig) -> None:
        self._config = config

    @property
    def config(self) -> ForensicsConfig:
        return self._config

    def generate_flags(
        self,
        address: str,
        funded_by: str,
        balances: WalletBalances,
        transactions: list[WalletTransaction],
        *,
        now: datetime | None = None,
    ) -> list[WalletFlagDetail]:
        flags: list[WalletFlagDetail] = []

        # Mixer funding is an automatic reject; nothing else matters
        if funded_by in self._config.mixer_addresses:
            return [WalletFlagDetail(
                WalletFlag.MIXER_REJECT,
                MIXER_IMPACT,
                f"Funded by known mixer: {funded_by[:8]}...",
            )]

        institutional = self._config.institutional_addresses
        if funded_by in institutional or address in institutional:
            flags.append(WalletFlagDetail(
                WalletFlag.INSTITUTIONAL,
                INSTITUTIONAL_IMPACT,
                "Linked to known institutional/VC wallet",
            ))

        create_count = count_token_creations(transactions)
        if create_count > SERIAL_CREATOR_MIN:
            flags.append(WalletFlagDetail(
                WalletFlag.SERIAL_CREATOR,
                SERIAL_CREATOR_IMPACT,
                f"Created {create_count} tokens - serial creator pattern",
            ))

        dump = dump_pattern(transactions, now=now)
        if dump.is_dumping:
            flags.append(WalletFlagDetail(
                WalletFlag.DUMP_ALERT,
                HEAVY_DUMP_IMPACT if dump.dump_percent > HEAVY_DUMP_PCT else DUMP_IMPACT,
                f"{dump.dump_percent:.0f}% sell transactions in last 7 days",
            ))

        if (
            not dump.is_dumping
            and balances.native_balance > NET_POSITIVE_MIN_SOL
            and balances.token_count > 0
        ):
            flags.append(WalletFlagDetail(
                WalletFlag.NET_POSITIVE,
                NET_POSITIVE_IMPACT,
                f"{balances.native_balance:.2f} SOL + {balances.token_count} tokens held",
            ))

        if all(f.impact >= 0 for f in flags):
            flags.append(WalletFlagDetail(
                WalletFlag.WALLET_VERIFIED,
                VERIFIED_IMPACT,
                "No negative signals detected",
            ))

        return flags

    def evaluate(
        self,
        address: str,
        funded_by: str,
        balances: WalletBalances,
        transactions: list[WalletTransaction],
        *,
        chain: str = "solana",
        now: datetime | None = None,
    ) -> WalletForensicsResult:
        now = now or datetime.now(UTC)
        flags = self.generate_flags(address, funded_by, balances, transactions, now=now)
        risk = classify_risk(flags)

        return WalletForensicsResult(
            deployer_address=address,
            chain=chain,
            funded_by=funded_by or UNKNOWN_FUNDER,
            native_balance=balances.native_balance,
            token_count=balances.token_count,
            recent_transactions=len(transactions),
            flags=tuple(flags),
            score_adjustment=sum(f.impact for f in flags),
            risk_level=risk,
            summary=summarize(risk, flags),
            analyzed_at=now.isoformat(),
        )


async def analyze_wallet(
    helius: HeliusClient,
    engine: WalletForensicsEngine,
    address: str,
    *,
    tx_limit: int = 100,
    degrade_funding_failures: bool = True,
) -> WalletForensicsResult:
    """Fetch balances, history and funding source in parallel, then evaluate.

    Raises RetrievalError when balances or transactions cannot be fetched.
    """
    balances, transactions, funded_by = await asyncio.gather(
        helius.get_balances(address),
        helius.get_transactions(address, limit=tx_limit),
        find_funding_source(helius, address, degrade=degrade_funding_failures),
    )

    sample = [tx.to_wallet_transaction() for tx in transactions]
    result = engine.evaluate(address, funded_by, balances, sample)

    log = logger.warning if result.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL) else logger.debug
    log(
        f"[FORENSICS] {address[:12]}: risk={result.risk_level.value} "
        f"adj={result.score_adjustment:+d} flags={[f.flag.value for f in result.flags]}"
    )
    return result
