"""Catalyst detection — short-term momentum and risk signals.

Pure function: no IO. Every rule is independent and all rules that fire
are returned. Ratio rules only fire when both operands are positive.
"""

from src.models.score import CatalystAdjustment
from src.models.snapshot import MarketSnapshot

MOMENTUM_VOLUME_SHARE = 0.5  # 6h volume / 24h volume
BUY_PRESSURE_RATIO = 2.0
SELL_PRESSURE_RATIO = 3.0
MULTI_PLATFORM_MIN = 4
PRICE_DUMP_PCT = -30.0


def detect_catalysts(snapshot: MarketSnapshot) -> list[CatalystAdjustment]:
    catalysts: list[CatalystAdjustment] = []

    vol_24h = snapshot.volume.h24
    vol_6h = snapshot.volume.h6
    price_change = snapshot.price_change.h24
    buys = snapshot.txns.h24.buys
    sells = snapshot.txns.h24.sells
    platforms = snapshot.socials.platform_count

    if vol_6h > 0 and vol_24h > 0 and vol_6h / vol_24h > MOMENTUM_VOLUME_SHARE:
        catalysts.append(CatalystAdjustment(
            "Volume Momentum", 5, "6h volume >50% of 24h - active momentum",
        ))

    if buys > 0 and sells > 0 and buys / sells > BUY_PRESSURE_RATIO:
        catalysts.append(CatalystAdjustment(
            "Buy Pressure", 3, f"Buy/sell ratio {buys / sells:.1f}x",
        ))

    if platforms >= MULTI_PLATFORM_MIN:
        catalysts.append(CatalystAdjustment(
            "Multi-Platform Presence", 5, f"{platforms} social platforms active",
        ))

    if price_change < PRICE_DUMP_PCT:
        catalysts.append(CatalystAdjustment(
            "Price Dump", -10, f"{price_change:.1f}% drop in 24h",
        ))

    if buys > 0 and sells > 0 and sells / buys > SELL_PRESSURE_RATIO:
        catalysts.append(CatalystAdjustment(
            "Sell Pressure", -5, f"Sell/buy ratio {sells / buys:.1f}x - dump risk",
        ))

    return catalysts
