import asyncio
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from src.parsers.dexscreener.models import DexScreenerPair, DexScreenerTokenRef
from src.parsers.exceptions import DexScreenerError
from src.parsers.rate_limiter import RateLimiter

BASE_URL = "https://api.dexscreener.com"
MAX_RETRIES = 3
RETRY_DELAYS = [1.0, 2.0, 4.0]
FEED_LOOKUP_LIMIT = 10


def _validate_all(model: type[BaseModel], items: list, path: str) -> list:
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as e:
        raise DexScreenerError(
            f"DexScreener {path} failed: malformed {model.__name__} ({e.error_count()} errors)"
        ) from e


def _parse_pairs(data: Any, path: str = "") -> list[DexScreenerPair]:
    """Pairs come back as a bare list, {"pairs": [...]} or {"pair": {...}}."""
    if isinstance(data, list):
        return _validate_all(DexScreenerPair, data, path)
    if not isinstance(data, dict):
        return []
    pairs = data.get("pairs") or data.get("pair") or []
    if not isinstance(pairs, list):
        pairs = [pairs]
    return _validate_all(DexScreenerPair, pairs, path)


class DexScreenerClient:
    """Async REST client for DexScreener public API (no auth required).

    Every failure, whether transport, HTTP status, invalid JSON or an
    unexpected payload shape, surfaces as DexScreenerError.
    """

    def __init__(self, rate_limiter: RateLimiter | None = None, max_rps: float = 4.0) -> None:
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=10.0,
            headers={"Accept": "application/json"},
        )
        self._rate_limiter = rate_limiter or RateLimiter(max_rps)

    async def _request_with_retry(self, path: str) -> httpx.Response:
        """Execute GET with retry on 429/timeout. Raises DexScreenerError."""
        for attempt in range(MAX_RETRIES):
            await self._rate_limiter.acquire()
            try:
                response = await self._client.get(path)
                if response.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    retry_after = response.headers.get("Retry-After")
                    if retry_after:
                        delay = max(float(retry_after), delay)
                    logger.debug(f"[DEXSCREENER] 429 rate limited, retrying in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                raise DexScreenerError(
                    f"DexScreener {path} failed: HTTP {e.response.status_code}"
                ) from e
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES - 1:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[DEXSCREENER] {type(e).__name__}, retrying in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    raise DexScreenerError(f"DexScreener {path} failed: {type(e).__name__}") from e
            except httpx.HTTPError as e:
                raise DexScreenerError(f"DexScreener {path} failed: {type(e).__name__}") from e
        raise DexScreenerError(f"DexScreener {path} failed: rate limited")

    async def _get_json(self, path: str) -> Any:
        response = await self._request_with_retry(path)
        try:
            return response.json()
        except ValueError as e:
            raise DexScreenerError(f"DexScreener {path} failed: invalid JSON") from e

    async def _get_refs(self, path: str) -> list[DexScreenerTokenRef]:
        data = await self._get_json(path)
        if not isinstance(data, list):
            return []
        return _validate_all(DexScreenerTokenRef, data, path)

    async def search(self, query: str) -> list[DexScreenerPair]:
        """Search pairs by keyword across all chains."""
        path = f"/latest/dex/search?q={quote(query)}"
        return _parse_pairs(await self._get_json(path), path)

    async def get_token_pairs(self, chain: str, token_address: str) -> list[DexScreenerPair]:
        """Get all pairs for a token (comma-separate up to 30 addresses)."""
        path = f"/tokens/v1/{chain}/{token_address}"
        return _parse_pairs(await self._get_json(path), path)

    async def get_pair(self, chain: str, pair_address: str) -> DexScreenerPair | None:
        path = f"/latest/dex/pairs/{chain}/{pair_address}"
        pairs = _parse_pairs(await self._get_json(path), path)
        return pairs[0] if pairs else None

    async def get_token_profiles(self) -> list[DexScreenerTokenRef]:
        """Latest token profiles (DexScreener's trending feed)."""
        return await self._get_refs("/token-profiles/latest/v1")

    async def get_token_boosts(self) -> list[DexScreenerTokenRef]:
        """Get currently boosted/promoted tokens."""
        return await self._get_refs("/token-boosts/latest/v1")

    async def _first_pairs(self, refs: list[DexScreenerTokenRef]) -> list[DexScreenerPair]:
        """First pair of each referenced token; failed lookups are skipped."""
        pairs: list[DexScreenerPair] = []
        for ref in refs:
            try:
                result = await self.get_token_pairs(ref.chainId, ref.tokenAddress)
            except DexScreenerError as e:
                logger.debug(f"[DEXSCREENER] Skipping {ref.tokenAddress[:12]}: {e}")
                continue
            if result:
                pairs.append(result[0])
        return pairs

    async def get_trending(self, limit: int = FEED_LOOKUP_LIMIT) -> list[DexScreenerPair]:
        """Pairs for the first ``limit`` unique tokens in the profiles feed."""
        seen: set[str] = set()
        unique: list[DexScreenerTokenRef] = []
        for ref in await self.get_token_profiles():
            key = f"{ref.chainId}:{ref.tokenAddress}"
            if key not in seen and len(unique) < limit:
                seen.add(key)
                unique.append(ref)
        return await self._first_pairs(unique)

    async def get_boosted(self, limit: int = FEED_LOOKUP_LIMIT) -> list[DexScreenerPair]:
        boosts = await self.get_token_boosts()
        return await self._first_pairs(boosts[:limit])

    async def close(self) -> None:
        await self._client.aclose()
