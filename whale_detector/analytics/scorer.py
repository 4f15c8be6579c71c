"""
Whale and insider scoring.

Three scorers, all returning an int in [0, 100] (capped, then truncated):

- whale_score: fixed-weight whale score from WalletStats.
    Early entry (40) = ratio (20) + count (20)
    Buy size (30)    = average entry size (20, saturates at 50 SOL) + total volume (10, saturates at 500 SOL)
    Repetition (20)  = interaction count (saturates at 50)
    Profit (10)      = winrate proxy
- insider_confidence: threshold-based insider confidence from raw counts.
- DynamicScorer: whale_score with caller-supplied component weights.

Each component saturates on its own; caps are hard ceilings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from whale_detector.analytics.models import WalletStats
from whale_detector.core.exceptions import InvalidInputError

MAX_SCORE = 100.0

DEFAULT_EARLY_ENTRY_WEIGHT = 40.0
DEFAULT_BUY_SIZE_WEIGHT = 30.0
DEFAULT_REPETITION_WEIGHT = 20.0
DEFAULT_PROFIT_WEIGHT = 10.0

# Normalization points: at or above these the sub-score saturates
AVG_ENTRY_SIZE_SATURATION_SOL = 50.0
TOTAL_VOLUME_SATURATION_SOL = 500.0
INTERACTION_COUNT_SATURATION = 50.0

# Sub-caps of the fixed whale score
EARLY_RATIO_CAP = 20.0
EARLY_COUNT_CAP = 20.0
EARLY_COUNT_POINTS = 2.0
AVG_SIZE_CAP = 20.0
VOLUME_CAP = 10.0

# Insider confidence component caps
INSIDER_EARLY_WEIGHT = 40.0
INSIDER_SIZE_WEIGHT = 30.0
INSIDER_VOLUME_WEIGHT = 20.0
INSIDER_WINRATE_PLACEHOLDER = 10.0


def _finalize(total: float) -> int:
    """Cap at 100 and truncate toward zero."""
    return int(min(total, MAX_SCORE))


def whale_score(stats: WalletStats) -> int:
    """Fixed-weight whale score (0-100). Wallets with no interactions score 0."""
    if stats.interaction_count == 0:
        return 0

    early_ratio = stats.early_entry_count / stats.interaction_count
    ratio_score = min(early_ratio * EARLY_RATIO_CAP, EARLY_RATIO_CAP)
    count_score = min(stats.early_entry_count * EARLY_COUNT_POINTS, EARLY_COUNT_CAP)
    early_entry_score = ratio_score + count_score

    avg_size_score = min(
        (stats.average_entry_size / AVG_ENTRY_SIZE_SATURATION_SOL) * AVG_SIZE_CAP,
        AVG_SIZE_CAP,
    )
    volume_score = min(
        (stats.total_volume_sol / TOTAL_VOLUME_SATURATION_SOL) * VOLUME_CAP,
        VOLUME_CAP,
    )
    buy_size_score = avg_size_score + volume_score

    repetition_score = min(
        (stats.interaction_count / INTERACTION_COUNT_SATURATION) * DEFAULT_REPETITION_WEIGHT,
        DEFAULT_REPETITION_WEIGHT,
    )

    profit_score = stats.winrate_proxy * DEFAULT_PROFIT_WEIGHT

    return _finalize(early_entry_score + buy_size_score + repetition_score + profit_score)


def insider_confidence(
    early_entry_count: int,
    total_interactions: int,
    avg_buy_size: float,
    min_threshold: float,
    min_repetitions: int,
) -> int:
    """
    Insider confidence (0-100).

    Early-entry repetition (40): (early / total) * 40, only once early_entry_count
        reaches min_repetitions; nothing below that.
    Buy size (30): full when avg_buy_size >= min_threshold, linear below.
    Volume (20): full when avg_buy_size >= 2 * min_threshold, linear below.
    Winrate (10): fixed placeholder, always added; no profit data is consulted.

    Raises:
        InvalidInputError: min_threshold is not a positive finite number
            (checked once there is at least one interaction).
    """
    if total_interactions == 0:
        return 0
    if not math.isfinite(min_threshold) or min_threshold <= 0:
        raise InvalidInputError(
            "min_threshold must be a positive finite number",
            min_threshold=min_threshold,
        )

    confidence = 0.0

    if early_entry_count >= min_repetitions:
        confidence += (early_entry_count / total_interactions) * INSIDER_EARLY_WEIGHT

    if avg_buy_size >= min_threshold:
        confidence += INSIDER_SIZE_WEIGHT
    else:
        confidence += (avg_buy_size / min_threshold) * INSIDER_SIZE_WEIGHT

    if avg_buy_size >= min_threshold * 2.0:
        confidence += INSIDER_VOLUME_WEIGHT
    else:
        confidence += min(
            (avg_buy_size / (min_threshold * 2.0)) * INSIDER_VOLUME_WEIGHT,
            INSIDER_VOLUME_WEIGHT,
        )

    confidence += INSIDER_WINRATE_PLACEHOLDER

    return _finalize(confidence)


@dataclass(frozen=True)
class ScoringWeights:
    """Component weights for DynamicScorer. Build defaults with default_weights()."""

    early_entry_weight: float = DEFAULT_EARLY_ENTRY_WEIGHT
    buy_size_weight: float = DEFAULT_BUY_SIZE_WEIGHT
    repetition_weight: float = DEFAULT_REPETITION_WEIGHT
    profit_weight: float = DEFAULT_PROFIT_WEIGHT

    def __post_init__(self) -> None:
        for name in ("early_entry_weight", "buy_size_weight", "repetition_weight", "profit_weight"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidInputError(f"{name} must be a finite, non-negative number", **{name: value})


def default_weights() -> ScoringWeights:
    """Stock 40/30/20/10 weights."""
    return ScoringWeights(
        early_entry_weight=DEFAULT_EARLY_ENTRY_WEIGHT,
        buy_size_weight=DEFAULT_BUY_SIZE_WEIGHT,
        repetition_weight=DEFAULT_REPETITION_WEIGHT,
        profit_weight=DEFAULT_PROFIT_WEIGHT,
    )


@dataclass(frozen=True)
class DynamicScorer:
    """
    Whale score with tunable component weights.

    Same ratios as whale_score; every sub-cap of a component is scaled by
    weight / default weight, so default_weights() reproduces whale_score exactly.
    """

    weights: ScoringWeights = field(default_factory=default_weights)

    def score(self, stats: WalletStats) -> int:
        if stats.interaction_count == 0:
            return 0
        w = self.weights

        early_scale = w.early_entry_weight / DEFAULT_EARLY_ENTRY_WEIGHT
        ratio_cap = EARLY_RATIO_CAP * early_scale
        count_cap = EARLY_COUNT_CAP * early_scale
        early_ratio = stats.early_entry_count / stats.interaction_count
        ratio_score = min(early_ratio * ratio_cap, ratio_cap)
        count_score = min(stats.early_entry_count * (EARLY_COUNT_POINTS * early_scale), count_cap)
        early_entry_score = ratio_score + count_score

        size_scale = w.buy_size_weight / DEFAULT_BUY_SIZE_WEIGHT
        avg_cap = AVG_SIZE_CAP * size_scale
        volume_cap = VOLUME_CAP * size_scale
        avg_size_score = min(
            (stats.average_entry_size / AVG_ENTRY_SIZE_SATURATION_SOL) * avg_cap,
            avg_cap,
        )
        volume_score = min(
            (stats.total_volume_sol / TOTAL_VOLUME_SATURATION_SOL) * volume_cap,
            volume_cap,
        )
        buy_size_score = avg_size_score + volume_score

        repetition_score = min(
            (stats.interaction_count / INTERACTION_COUNT_SATURATION) * w.repetition_weight,
            w.repetition_weight,
        )

        profit_score = stats.winrate_proxy * w.profit_weight

        return _finalize(early_entry_score + buy_size_score + repetition_score + profit_score)
