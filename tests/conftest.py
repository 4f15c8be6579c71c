"""
Pytest fixtures for Whale Detector tests. Builders for interaction records and wallet stats.
"""

from __future__ import annotations

import pytest

from whale_detector.analytics.models import TokenInteraction, WalletStats

WHALE_WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
RETAIL_WALLET = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
TOKEN_MINT = "So11111111111111111111111111111111111111112"


def make_interaction(
    wallet: str = "addr1",
    amount: float = 10.0,
    early: bool = False,
    mint: str = "token1",
    block_time: int = 1000,
) -> TokenInteraction:
    return TokenInteraction(
        wallet_address=wallet,
        token_mint=mint,
        block_time=block_time,
        sol_amount=amount,
        is_early_entry=early,
    )


def make_stats(
    address: str = "addr1",
    total_volume_sol: float = 0.0,
    interaction_count: int = 0,
    average_entry_size: float = 0.0,
    early_entry_count: int = 0,
    winrate_proxy: float = 0.0,
) -> WalletStats:
    return WalletStats(
        address=address,
        total_volume_sol=total_volume_sol,
        interaction_count=interaction_count,
        average_entry_size=average_entry_size,
        early_entry_count=early_entry_count,
        winrate_proxy=winrate_proxy,
    )


@pytest.fixture
def interaction_factory():
    return make_interaction


@pytest.fixture
def stats_factory():
    return make_stats


@pytest.fixture
def whale_interactions() -> list[TokenInteraction]:
    """Five early 20 SOL buys across five tokens from one wallet."""
    return [
        make_interaction(WHALE_WALLET, 20.0, early=True, mint=f"token{i}", block_time=1000 + i)
        for i in range(5)
    ]


@pytest.fixture
def retail_interactions() -> list[TokenInteraction]:
    """Three small, late, uneven buys from one wallet."""
    return [
        make_interaction(RETAIL_WALLET, 0.1, mint="token0", block_time=5000),
        make_interaction(RETAIL_WALLET, 0.5, mint="token1", block_time=6000),
        make_interaction(RETAIL_WALLET, 2.0, mint="token2", block_time=7000),
    ]


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every detection env var so settings fall back to defaults."""
    for name in (
        "EARLY_ENTRY_WINDOW_SECONDS",
        "MIN_BUY_SIZE_SOL",
        "MIN_INSIDER_REPETITIONS",
        "WHALE_SCORE_THRESHOLD",
        "CLUSTER_SIMILARITY_THRESHOLD",
        "PATTERN_CONSISTENCY_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
