"""Tests for transaction classification heuristics."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta

import pytest

from src.models.wallet import WalletTransaction
from src.parsers.tx_classifier import (
    count_token_creations,
    dump_pattern,
    is_sell,
    is_token_creation,
)


def _ts(now: datetime, *, days_ago: float) -> int:
    return int((now - timedelta(days=days_ago)).timestamp())


def _sell(ts: int) -> WalletTransaction:
    return WalletTransaction(type="SWAP", timestamp=ts, description="Dev sold 1000 FOO for 2 SOL")


def _buy(ts: int) -> WalletTransaction:
    return WalletTransaction(type="SWAP", timestamp=ts, description="Dev swapped 2 SOL for 1000 FOO")


class TestTokenCreation:
    def test_create_type(self) -> None:
        assert is_token_creation(WalletTransaction(type="CREATE"))

    def test_description_phrases_case_insensitive(self) -> None:
        assert is_token_creation(WalletTransaction(description="Dev Created token FOO"))
        assert is_token_creation(WalletTransaction(description="INITIALIZE MINT for BAR"))

    def test_plain_transfer_is_not_creation(self) -> None:
        tx = WalletTransaction(type="TRANSFER", description="Dev transferred 1 SOL")
        assert not is_token_creation(tx)

    def test_count(self) -> None:
        txs = [WalletTransaction(type="CREATE")] * 3 + [WalletTransaction(type="TRANSFER")]
        assert count_token_creations(txs) == 3
        assert count_token_creations([]) == 0


class TestSell:
    def test_swap_with_sold(self) -> None:
        assert is_sell(_sell(0))

    def test_swap_without_sold(self) -> None:
        assert not is_sell(_buy(0))

    def test_sold_outside_swap(self) -> None:
        assert not is_sell(WalletTransaction(type="TRANSFER", description="sold to a friend"))


class TestDumpPattern:
    def test_empty_history(self, fixed_now: datetime) -> None:
        result = dump_pattern([], now=fixed_now)
        assert result.recent_count == 0
        assert result.dump_percent == 0.0
        assert not result.is_dumping

    def test_majority_sells_is_dumping(self, fixed_now: datetime) -> None:
        txs = [_sell(_ts(fixed_now, days_ago=1))] * 3 + [_buy(_ts(fixed_now, days_ago=1))]
        result = dump_pattern(txs, now=fixed_now)
        assert result.recent_count == 4
        assert result.sell_count == 3
        assert result.dump_percent == 75.0
        assert result.is_dumping

    def test_needs_at_least_three_sells(self, fixed_now: datetime) -> None:
        txs = [_sell(_ts(fixed_now, days_ago=1))] * 2
        result = dump_pattern(txs, now=fixed_now)
        assert result.dump_percent == 100.0
        assert not result.is_dumping

    def test_exactly_half_is_not_dumping(self, fixed_now: datetime) -> None:
        ts = _ts(fixed_now, days_ago=2)
        result = dump_pattern([_sell(ts)] * 3 + [_buy(ts)] * 3, now=fixed_now)
        assert result.dump_percent == 50.0
        assert not result.is_dumping

    def test_old_sells_ignored(self, fixed_now: datetime) -> None:
        txs = [_sell(_ts(fixed_now, days_ago=10))] * 5 + [_buy(_ts(fixed_now, days_ago=1))]
        result = dump_pattern(txs, now=fixed_now)
        assert result.recent_count == 1
        assert result.sell_count == 0
        assert not result.is_dumping

    def test_window_boundary_is_exclusive(self, fixed_now: datetime) -> None:
        result = dump_pattern([_sell(_ts(fixed_now, days_ago=7))] * 3, now=fixed_now)
        assert result.recent_count == 0

    def test_result_is_immutable(self, fixed_now: datetime) -> None:
        result = dump_pattern([], now=fixed_now)
        with pytest.raises(FrozenInstanceError):
            result.is_dumping = True  # type: ignore[misc]
