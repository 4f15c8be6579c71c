"""
Aggregator: reduce interaction records to per-wallet WalletStats.

Stats are rebuilt from scratch on every call; no incremental state is kept.
Sums use math.fsum so results do not depend on record order.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence

from whale_detector.analytics.models import TokenInteraction, WalletStats

# Early-entry ratio is scaled by this factor to build the winrate proxy
WINRATE_EARLY_RATIO_MULTIPLIER = 1.5


def _winrate_proxy(early_entry_count: int, interaction_count: int) -> float:
    if interaction_count == 0:
        return 0.0
    return min(1.0, (early_entry_count / interaction_count) * WINRATE_EARLY_RATIO_MULTIPLIER)


def aggregate(interactions: Sequence[TokenInteraction]) -> WalletStats:
    """
    Aggregate one wallet's interactions into WalletStats.

    Assumes all records share a wallet_address and takes the first one's.
    Empty input returns WalletStats.empty().
    """
    if not interactions:
        return WalletStats.empty()

    interaction_count = len(interactions)
    total_volume = math.fsum(i.sol_amount for i in interactions)
    early_entry_count = sum(1 for i in interactions if i.is_early_entry)

    return WalletStats(
        address=interactions[0].wallet_address,
        total_volume_sol=total_volume,
        interaction_count=interaction_count,
        average_entry_size=total_volume / interaction_count,
        early_entry_count=early_entry_count,
        winrate_proxy=_winrate_proxy(early_entry_count, interaction_count),
    )


def group_by_wallet(
    interactions: Iterable[TokenInteraction],
) -> dict[str, list[TokenInteraction]]:
    """Partition interactions by wallet_address."""
    grouped: dict[str, list[TokenInteraction]] = defaultdict(list)
    for interaction in interactions:
        grouped[interaction.wallet_address].append(interaction)
    return dict(grouped)


def aggregate_by_wallet(interactions: Iterable[TokenInteraction]) -> dict[str, WalletStats]:
    """Aggregate every wallet in a mixed interaction log. Key order is unspecified."""
    return {
        address: aggregate(wallet_interactions)
        for address, wallet_interactions in group_by_wallet(interactions).items()
    }
