"""
Insider pattern detection over a wallet's raw interactions.

detect_pattern is a boolean gate (enough early entries, large enough buys);
consistency_score measures how uniform purchase sizes are via the
coefficient of variation (population std / mean).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from whale_detector.analytics.models import TokenInteraction
from whale_detector.config.settings import DetectionSettings
from whale_detector.core.exceptions import InvalidInputError
from whale_detector.whale_logging import get_logger

logger = get_logger(__name__)

# Fewer interactions than this is too small a sample for a consistency score
MIN_CONSISTENCY_SAMPLE = 3


@dataclass(frozen=True)
class PatternDetector:
    """Thresholds for the insider pattern gate and the consistency check."""

    min_early_entries: int
    min_avg_buy_size: float
    consistency_threshold: float
    """Minimum consistency (0-1 fraction of the 0-100 score) for is_consistent."""

    def __post_init__(self) -> None:
        if self.min_early_entries < 0:
            raise InvalidInputError("min_early_entries must be >= 0", min_early_entries=self.min_early_entries)
        if not math.isfinite(self.min_avg_buy_size) or self.min_avg_buy_size < 0:
            raise InvalidInputError(
                "min_avg_buy_size must be a finite, non-negative number",
                min_avg_buy_size=self.min_avg_buy_size,
            )
        if not 0.0 <= self.consistency_threshold <= 1.0:
            raise InvalidInputError(
                "consistency_threshold must be in [0, 1]",
                consistency_threshold=self.consistency_threshold,
            )

    @classmethod
    def from_settings(cls, settings: DetectionSettings) -> PatternDetector:
        return cls(
            min_early_entries=settings.min_insider_repetitions,
            min_avg_buy_size=settings.min_buy_size_sol,
            consistency_threshold=settings.consistency_threshold,
        )

    def detect_pattern(self, interactions: Sequence[TokenInteraction]) -> bool:
        """
        True if the wallet has at least min_early_entries early buys and its
        mean buy size is at least min_avg_buy_size. Empty input is never a pattern.
        """
        if not interactions:
            return False
        if len(interactions) < self.min_early_entries:
            return False

        early_count = sum(1 for i in interactions if i.is_early_entry)
        if early_count < self.min_early_entries:
            return False

        avg_size = float(np.mean([i.sol_amount for i in interactions]))
        return avg_size >= self.min_avg_buy_size

    def consistency_score(self, interactions: Sequence[TokenInteraction]) -> float:
        """
        Purchase-size consistency in [0, 100]: (1 - min(1, CV)) * 100.

        Returns 0.0 for fewer than 3 interactions. Identical sizes score 100;
        a CV of 1 or more scores 0.

        Raises:
            InvalidInputError: mean purchase size is 0 (CV undefined).
        """
        if len(interactions) < MIN_CONSISTENCY_SAMPLE:
            return 0.0

        sizes = np.asarray([i.sol_amount for i in interactions], dtype=np.float64)
        mean = float(sizes.mean())
        if mean == 0.0:
            raise InvalidInputError(
                "consistency_score is undefined when the mean purchase size is 0",
                interaction_count=len(interactions),
            )
        cv = float(sizes.std(ddof=0)) / mean
        score = (1.0 - min(1.0, cv)) * 100.0
        logger.debug(
            "pattern_consistency_score",
            interaction_count=len(interactions),
            coefficient_of_variation=round(cv, 6),
            score=round(score, 4),
        )
        return score

    def is_consistent(self, interactions: Sequence[TokenInteraction]) -> bool:
        """True if consistency_score / 100 reaches consistency_threshold."""
        return self.consistency_score(interactions) / 100.0 >= self.consistency_threshold
