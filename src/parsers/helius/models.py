"""Pydantic models for Helius Enhanced Transaction API responses."""

from decimal import Decimal

from pydantic import BaseModel

from src.models.wallet import WalletTransaction


class HeliusTokenTransfer(BaseModel):
    """Token transfer within a transaction."""

    from_user_account: str = ""
    to_user_account: str = ""
    token_amount: Decimal = Decimal("0")
    mint: str = ""


class HeliusNativeTransfer(BaseModel):
    """SOL native transfer within a transaction."""

    from_user_account: str = ""
    to_user_account: str = ""
    amount: int = 0  # lamports


class HeliusTransaction(BaseModel):
    """Enhanced parsed transaction from Helius."""

    signature: str = ""
    type: str = "UNKNOWN"  # "TRANSFER", "SWAP", "CREATE", etc.
    source: str = ""
    fee: int = 0  # lamports
    timestamp: int = 0  # unix
    description: str = ""
    token_transfers: list[HeliusTokenTransfer] = []
    native_transfers: list[HeliusNativeTransfer] = []

    def to_wallet_transaction(self) -> WalletTransaction:
        return WalletTransaction(
            type=self.type or "UNKNOWN",
            timestamp=self.timestamp or 0,
            description=self.description or "",
        )


class HeliusTokenBalance(BaseModel):
    mint: str = ""
    amount: int = 0
    decimals: int = 0
