"""
Behavioral wallet clustering.

Greedy star partition: each unassigned wallet seeds a cluster and pulls in
every other unassigned wallet whose similarity to the seed reaches the
threshold. Members are compared against the seed only (not against each
other), so this is not full-linkage clustering. Addresses are scanned in
lexical order, which makes the output deterministic.

Similarity is the mean of three per-dimension scores in [0, 1]: total volume,
average entry size (both 1 - |a-b| / (a+b+1)) and winrate proxy (1 - |a-b|).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from whale_detector.analytics.models import WalletStats
from whale_detector.whale_logging import get_logger

logger = get_logger(__name__)


def _magnitude_similarity(a: float, b: float) -> float:
    # +1 keeps the denominator non-zero when both values are 0
    return 1.0 - abs(a - b) / (a + b + 1.0)


def similarity(stats1: WalletStats, stats2: WalletStats) -> float:
    """Symmetric behavioral similarity in [0, 1]; identical stats score 1.0."""
    volume_sim = _magnitude_similarity(stats1.total_volume_sol, stats2.total_volume_sol)
    size_sim = _magnitude_similarity(stats1.average_entry_size, stats2.average_entry_size)
    winrate_sim = 1.0 - abs(stats1.winrate_proxy - stats2.winrate_proxy)
    return (volume_sim + size_sim + winrate_sim) / 3.0


def cluster_wallets(
    stats_by_address: Mapping[str, WalletStats],
    similarity_threshold: float,
) -> list[list[str]]:
    """
    Partition wallets into clusters of behaviorally similar addresses.

    Every wallet lands in exactly one cluster; the seed is listed first.
    A threshold above 1.0 leaves every wallet in its own cluster.
    """
    addresses = sorted(stats_by_address)
    assigned: set[str] = set()
    clusters: list[list[str]] = []

    for seed in addresses:
        if seed in assigned:
            continue
        seed_stats = stats_by_address[seed]
        cluster = [seed]
        assigned.add(seed)

        for candidate in addresses:
            if candidate in assigned:
                continue
            if similarity(seed_stats, stats_by_address[candidate]) >= similarity_threshold:
                cluster.append(candidate)
                assigned.add(candidate)

        clusters.append(cluster)

    logger.debug(
        "wallet_cluster_done",
        wallet_count=len(addresses),
        cluster_count=len(clusters),
        similarity_threshold=similarity_threshold,
    )
    return clusters


@dataclass(frozen=True)
class WalletClusterer:
    similarity_threshold: float

    def cluster(self, stats_by_address: Mapping[str, WalletStats]) -> list[list[str]]:
        return cluster_wallets(stats_by_address, self.similarity_threshold)
