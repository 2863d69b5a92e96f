from decimal import Decimal

from pydantic import BaseModel

from src.models.snapshot import (
    MarketSnapshot,
    PeriodStats,
    PeriodTxns,
    SocialPresence,
    TokenIdentity,
    TxnCount,
)


class DexScreenerToken(BaseModel):
    address: str = ""
    name: str | None = None
    symbol: str | None = None

    model_config = {"extra": "ignore"}

    def to_identity(self) -> TokenIdentity:
        return TokenIdentity(address=self.address, name=self.name or "", symbol=self.symbol or "")


class DexScreenerPeriods(BaseModel):
    """Volume or price-change buckets keyed by window."""

    m5: Decimal | None = None
    h1: Decimal | None = None
    h6: Decimal | None = None
    h24: Decimal | None = None

    model_config = {"extra": "ignore"}

    def to_stats(self) -> PeriodStats:
        return PeriodStats(
            m5=float(self.m5 or 0),
            h1=float(self.h1 or 0),
            h6=float(self.h6 or 0),
            h24=float(self.h24 or 0),
        )


class DexScreenerLiquidity(BaseModel):
    usd: Decimal | None = None
    base: Decimal | None = None
    quote: Decimal | None = None

    model_config = {"extra": "ignore"}


class DexScreenerTxns(BaseModel):
    buys: int | None = None
    sells: int | None = None

    model_config = {"extra": "ignore"}

    def to_count(self) -> TxnCount:
        return TxnCount(buys=self.buys or 0, sells=self.sells or 0)


class DexScreenerTxnsByPeriod(BaseModel):
    m5: DexScreenerTxns | None = None
    h1: DexScreenerTxns | None = None
    h6: DexScreenerTxns | None = None
    h24: DexScreenerTxns | None = None

    model_config = {"extra": "ignore"}


class DexScreenerLink(BaseModel):
    label: str | None = None
    type: str | None = None
    url: str = ""

    model_config = {"extra": "ignore"}


class DexScreenerInfo(BaseModel):
    imageUrl: str | None = None
    websites: list[DexScreenerLink] | None = None
    socials: list[DexScreenerLink] | None = None

    model_config = {"extra": "ignore"}


class DexScreenerTokenRef(BaseModel):
    """Entry of the token-profiles / token-boosts feeds."""

    chainId: str = ""
    tokenAddress: str = ""
    amount: Decimal | None = None

    model_config = {"extra": "ignore"}


class DexScreenerPair(BaseModel):
    chainId: str = ""
    dexId: str = ""
    url: str = ""
    pairAddress: str = ""
    baseToken: DexScreenerToken | None = None
    quoteToken: DexScreenerToken | None = None
    priceUsd: str | None = None
    txns: DexScreenerTxnsByPeriod | None = None
    volume: DexScreenerPeriods | None = None
    priceChange: DexScreenerPeriods | None = None
    liquidity: DexScreenerLiquidity | None = None
    fdv: Decimal | None = None
    marketCap: Decimal | None = None
    pairCreatedAt: int | None = None
    info: DexScreenerInfo | None = None

    model_config = {"extra": "ignore"}

    def to_snapshot(self) -> MarketSnapshot:
        """Normalize into a MarketSnapshot with zero defaults for missing data."""
        txns = self.txns or DexScreenerTxnsByPeriod()
        info = self.info or DexScreenerInfo()
        market_cap = self.marketCap if self.marketCap is not None else self.fdv

        try:
            price = float(self.priceUsd) if self.priceUsd else 0.0
        except ValueError:
            price = 0.0

        return MarketSnapshot(
            chain_id=self.chainId,
            dex_id=self.dexId,
            pair_address=self.pairAddress,
            url=self.url,
            base_token=self.baseToken.to_identity() if self.baseToken else TokenIdentity(),
            quote_token=self.quoteToken.to_identity() if self.quoteToken else TokenIdentity(),
            price_usd=price,
            liquidity_usd=float(self.liquidity.usd or 0) if self.liquidity else 0.0,
            market_cap_usd=float(market_cap or 0),
            volume=self.volume.to_stats() if self.volume else PeriodStats(),
            price_change=self.priceChange.to_stats() if self.priceChange else PeriodStats(),
            txns=PeriodTxns(
                m5=txns.m5.to_count() if txns.m5 else TxnCount(),
                h1=txns.h1.to_count() if txns.h1 else TxnCount(),
                h6=txns.h6.to_count() if txns.h6 else TxnCount(),
                h24=txns.h24.to_count() if txns.h24 else TxnCount(),
            ),
            pair_created_at=self.pairCreatedAt or None,
            socials=SocialPresence(
                website_count=len(info.websites or []),
                social_link_count=len(info.socials or []),
            ),
        )
