"""Score one token (and optionally its deployer wallet) from the command line.

Prints the score as JSON, in the same flat structure the API returns.

Usage:
    python scripts/score_token.py <address>
    python scripts/score_token.py <address> --chain base
    python scripts/score_token.py <address> --forensics
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from config.settings import Settings, settings  # noqa: E402
from src.parsers.dexscreener.client import DexScreenerClient  # noqa: E402
from src.parsers.exceptions import RetrievalError  # noqa: E402
from src.parsers.helius.client import HeliusClient  # noqa: E402
from src.parsers.scoring import assess_listing_readiness  # noqa: E402
from src.parsers.token_scan import check_deployer, score_contract  # noqa: E402
from src.parsers.wallet_forensics import ForensicsConfig, WalletForensicsEngine  # noqa: E402
from src.utils.logger import setup_logger  # noqa: E402


def build_clients(cfg: Settings, forensics: bool) -> tuple[DexScreenerClient, HeliusClient | None]:
    """Clients with the same rate limits the API uses."""
    dex = DexScreenerClient(max_rps=cfg.dexscreener_max_rps)
    helius = HeliusClient(cfg.helius_api_key, max_rps=cfg.helius_max_rps) if forensics else None
    return dex, helius


async def run(address: str, chain: str, forensics: bool) -> int:
    dex, helius = build_clients(settings, forensics)
    try:
        if forensics:
            engine = WalletForensicsEngine(ForensicsConfig.from_settings(settings))
            check = await check_deployer(
                dex,
                helius,
                engine,
                address,
                tx_limit=settings.wallet_tx_limit,
                degrade_funding_failures=settings.funding_lookup_degrade,
            )
            if check is None:
                print(f"No pairs found for {address} on solana")
                return 1
            report = {
                "forensics": check.forensics.to_dict(),
                "base_score": check.base_score.to_dict(),
                "adjusted_score": check.adjusted_score.to_dict(),
                "readiness": assess_listing_readiness(
                    check.adjusted_score, check.forensics
                ).to_dict(),
            }
        else:
            score = await score_contract(dex, chain, address)
            if score is None:
                print(f"No pairs found for {address} on {chain}")
                return 1
            report = {
                "score": score.to_dict(),
                "readiness": assess_listing_readiness(score).to_dict(),
            }
    except RetrievalError as e:
        logger.error(f"Lookup failed: {e}")
        return 2
    finally:
        await dex.close()
        if helius is not None:
            await helius.close()

    print(json.dumps(report, indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a token by contract address")
    parser.add_argument("address")
    parser.add_argument("--chain", default=settings.default_chain)
    parser.add_argument(
        "--forensics", action="store_true", help="Run deployer wallet forensics (Solana, needs HELIUS_API_KEY)"
    )
    args = parser.parse_args()

    if args.forensics and not settings.helius_api_key:
        parser.error("--forensics requires HELIUS_API_KEY")
    if args.forensics and args.chain != "solana":
        parser.error("--forensics is only available for Solana tokens")

    setup_logger(level="WARNING")
    sys.exit(asyncio.run(run(args.address, args.chain, args.forensics)))


if __name__ == "__main__":
    main()
