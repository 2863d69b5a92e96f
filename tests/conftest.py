"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest

from src.parsers.wallet_forensics import ForensicsConfig, WalletForensicsEngine

MIXER = "MixerWa11et1111111111111111111111111111111"
INSTITUTION = "VcFund1111111111111111111111111111111111111"


@pytest.fixture
def fixed_now() -> datetime:
    """Scoring clock pinned so ages and dump windows are reproducible."""
    return datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def forensics_engine() -> WalletForensicsEngine:
    return WalletForensicsEngine(
        ForensicsConfig.from_addresses(mixers=[MIXER], institutional=[INSTITUTION])
    )
