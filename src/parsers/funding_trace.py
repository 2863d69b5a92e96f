"""Deployer funding source: who first sent SOL to the wallet."""

from loguru import logger

from src.models.wallet import UNKNOWN_FUNDER
from src.parsers.exceptions import RetrievalError
from src.parsers.helius.client import HeliusClient
from src.parsers.helius.models import HeliusTransaction

FUNDING_TX_LIMIT = 100


def earliest_funder(address: str, transactions: list[HeliusTransaction]) -> str:
    """Sender of the earliest positive native transfer into ``address``."""
    incoming = sorted(
        (
            tx for tx in transactions
            if any(
                nt.to_user_account == address and nt.amount > 0
                for nt in tx.native_transfers
            )
        ),
        key=lambda tx: tx.timestamp or 0,
    )
    if not incoming:
        return UNKNOWN_FUNDER

    first = incoming[0]
    sender = next(
        (nt.from_user_account for nt in first.native_transfers if nt.to_user_account == address),
        "",
    )
    return sender or UNKNOWN_FUNDER


async def find_funding_source(
    helius: HeliusClient,
    address: str,
    *,
    degrade: bool = True,
) -> str:
    """Trace the funding wallet from the last 100 TRANSFER transactions.

    With ``degrade`` (default) any retrieval failure yields UNKNOWN instead
    of aborting the forensics run.
    """
    try:
        txs = await helius.get_transactions(address, limit=FUNDING_TX_LIMIT, tx_type="TRANSFER")
    except RetrievalError as e:
        if not degrade:
            raise
        logger.debug(f"[FUNDING] Lookup failed for {address[:12]}, using UNKNOWN: {e}")
        return UNKNOWN_FUNDER

    funder = earliest_funder(address, txs)
    if funder != UNKNOWN_FUNDER:
        logger.debug(f"[FUNDING] {address[:12]} funded by {funder[:12]}")
    return funder
