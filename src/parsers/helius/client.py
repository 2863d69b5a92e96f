"""Helius API client — balances and enhanced transaction history for Solana."""

import asyncio
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from src.models.wallet import WalletBalances
from src.parsers.exceptions import HeliusError
from src.parsers.helius.models import (
    HeliusNativeTransfer,
    HeliusTokenBalance,
    HeliusTokenTransfer,
    HeliusTransaction,
)
from src.parsers.rate_limiter import RateLimiter

API_URL = "https://api.helius.xyz/v0"
LAMPORTS_PER_SOL = 1_000_000_000
MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]


class HeliusClient:
    """Async HTTP client for Helius Enhanced API.

    Unlike a best-effort enrichment client, failures here raise HeliusError:
    wallet forensics must not run on silently missing balances or history.
    """

    def __init__(self, api_key: str, max_rps: float = 10.0) -> None:
        self._api_key = api_key
        self._rate_limiter = RateLimiter(max_rps)
        self._client = httpx.AsyncClient(base_url=API_URL, timeout=15.0)

    async def close(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        """GET with retry on 429/timeout. Raises HeliusError on any final failure."""
        params = {"api-key": self._api_key, **params}

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(path, params=params)

                if resp.status_code == 429 and attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[HELIUS] 429 rate limited, retrying in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                if resp.status_code != 200:
                    raise HeliusError(f"Helius {path} failed: HTTP {resp.status_code}")

                return resp.json()

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    await asyncio.sleep(RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)])
                else:
                    logger.warning(f"[HELIUS] {path} failed: {e}")
                    raise HeliusError(f"Helius {path} failed: {type(e).__name__}") from e
            except httpx.HTTPError as e:
                logger.warning(f"[HELIUS] {path} failed: {type(e).__name__}: {e}")
                raise HeliusError(f"Helius {path} failed: {type(e).__name__}") from e
            except ValueError as e:
                # 200 with a body that is not JSON
                logger.warning(f"[HELIUS] {path} returned invalid JSON: {e}")
                raise HeliusError(f"Helius {path} failed: invalid JSON") from e

        raise HeliusError(f"Helius {path} failed: rate limited")

    async def get_balances(self, address: str) -> WalletBalances:
        """Native SOL balance and number of token accounts held."""
        path = f"/addresses/{address}/balances"
        data = await self._get_json(path, {})
        if not isinstance(data, dict):
            raise HeliusError(f"Helius {path} failed: unexpected payload {type(data).__name__}")
        try:
            tokens = [HeliusTokenBalance.model_validate(t) for t in data.get("tokens") or []]
            native = float(data.get("nativeBalance") or 0)
        except (ValidationError, TypeError, ValueError) as e:
            raise HeliusError(f"Helius {path} failed: malformed balances") from e
        return WalletBalances(
            native_balance=native / LAMPORTS_PER_SOL,
            token_count=len(tokens),
        )

    async def get_transactions(
        self,
        address: str,
        *,
        limit: int = 100,
        tx_type: str | None = None,
    ) -> list[HeliusTransaction]:
        """Most recent enhanced transactions for an address (max 100)."""
        params: dict[str, Any] = {"limit": min(limit, 100)}
        if tx_type:
            params["type"] = tx_type

        path = f"/addresses/{address}/transactions"
        data = await self._get_json(path, params)
        if not isinstance(data, list):
            return []
        try:
            return [_parse_tx(tx) for tx in data]
        except (ValidationError, AttributeError, TypeError) as e:
            raise HeliusError(f"Helius {path} failed: malformed transaction") from e


def _parse_tx(data: dict) -> HeliusTransaction:
    """Parse raw Helius enhanced transaction."""
    token_transfers = [
        HeliusTokenTransfer(
            from_user_account=t.get("fromUserAccount") or "",
            to_user_account=t.get("toUserAccount") or "",
            token_amount=t.get("tokenAmount") or 0,
            mint=t.get("mint") or "",
        )
        for t in data.get("tokenTransfers") or []
    ]

    native_transfers = [
        HeliusNativeTransfer(
            from_user_account=t.get("fromUserAccount") or "",
            to_user_account=t.get("toUserAccount") or "",
            amount=t.get("amount") or 0,
        )
        for t in data.get("nativeTransfers") or []
    ]

    return HeliusTransaction(
        signature=data.get("signature") or "",
        type=data.get("type") or "UNKNOWN",
        source=data.get("source") or "",
        fee=data.get("fee") or 0,
        timestamp=data.get("timestamp") or 0,
        description=data.get("description") or "",
        token_transfers=token_transfers,
        native_transfers=native_transfers,
    )
