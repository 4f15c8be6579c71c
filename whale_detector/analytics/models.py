"""
Value objects shared by the analytics modules.

TokenInteraction is one purchase event supplied by an ingestion collaborator;
WalletStats is the aggregate profile the Aggregator builds from them. Both are
frozen: every analytics step returns new objects and never mutates its input.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

from whale_detector.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class TokenInteraction:
    """
    Single wallet-token purchase event.

    Address and mint formats are not validated; amounts and times are,
    since every downstream formula assumes them non-negative and finite.
    """

    wallet_address: str
    token_mint: str
    block_time: int
    """Unix timestamp in seconds."""
    sol_amount: float
    """Purchase size in SOL."""
    is_early_entry: bool = False
    """Set by the entry classifier."""

    def __post_init__(self) -> None:
        if self.block_time < 0:
            raise InvalidInputError(
                "block_time must be >= 0",
                wallet=self.wallet_address,
                block_time=self.block_time,
            )
        if not math.isfinite(self.sol_amount) or self.sol_amount < 0:
            raise InvalidInputError(
                "sol_amount must be a finite, non-negative number",
                wallet=self.wallet_address,
                sol_amount=self.sol_amount,
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WalletStats:
    """
    Aggregate profile of one wallet over an interaction set.

    An empty address is the "no data" sentinel (see empty()).
    """

    address: str
    total_volume_sol: float
    interaction_count: int
    average_entry_size: float
    """total_volume_sol / interaction_count; 0.0 when there are no interactions."""
    early_entry_count: int
    winrate_proxy: float
    """Heuristic in [0, 1] derived from the early-entry ratio, not realized P&L."""

    def __post_init__(self) -> None:
        for name in ("total_volume_sol", "average_entry_size"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidInputError(
                    f"{name} must be a finite, non-negative number",
                    wallet=self.address,
                    **{name: value},
                )
        if self.interaction_count < 0 or self.early_entry_count < 0:
            raise InvalidInputError(
                "interaction_count and early_entry_count must be >= 0",
                wallet=self.address,
                interaction_count=self.interaction_count,
                early_entry_count=self.early_entry_count,
            )
        if self.early_entry_count > self.interaction_count:
            raise InvalidInputError(
                "early_entry_count cannot exceed interaction_count",
                wallet=self.address,
                interaction_count=self.interaction_count,
                early_entry_count=self.early_entry_count,
            )
        if not 0.0 <= self.winrate_proxy <= 1.0:
            raise InvalidInputError(
                "winrate_proxy must be in [0, 1]",
                wallet=self.address,
                winrate_proxy=self.winrate_proxy,
            )

    @classmethod
    def empty(cls) -> WalletStats:
        return cls(
            address="",
            total_volume_sol=0.0,
            interaction_count=0,
            average_entry_size=0.0,
            early_entry_count=0,
            winrate_proxy=0.0,
        )

    @property
    def early_entry_ratio(self) -> float:
        if self.interaction_count == 0:
            return 0.0
        return self.early_entry_count / self.interaction_count

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
