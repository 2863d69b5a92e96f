from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Helius (wallet forensics)
    helius_api_key: str = ""
    helius_max_rps: float = 10.0  # free tier: 10 RPS

    # DexScreener (300 req/min public limit)
    dexscreener_max_rps: float = 4.0

    # Wallet forensics address lists (comma-separated, editable without redeploy)
    mixer_addresses: str = ""
    institutional_addresses: str = ""

    # Funding-source lookup: True = degrade to UNKNOWN on failure, False = propagate
    funding_lookup_degrade: bool = True
    wallet_tx_limit: int = 100

    # Scanning
    default_chain: str = "solana"
    max_results_per_scan: int = 20
    scan_top_n: int = 10
    scan_min_liquidity_usd: float = 100_000.0
    scan_min_volume_24h_usd: float = 50_000.0
    scan_min_market_cap_usd: float = 500_000.0

    # Pipeline thresholds
    min_score_for_wallet_check: int = 70
    min_score_for_outreach: int = 85

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_rate_limit: str = "30/minute"


settings = Settings()
