"""
Detection settings.

Thresholds used by the entry classifier, insider check, pattern detector,
whale watch and clusterer. Built from environment variables (and .env) by
get_settings(); DetectionSettings.defaults() gives the stock values.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

from whale_detector.config.env import get_env_float, get_env_int, load_whale_env
from whale_detector.core.exceptions import ConfigurationError

DEFAULT_EARLY_ENTRY_WINDOW_SECONDS = 60
DEFAULT_MIN_BUY_SIZE_SOL = 5.0
DEFAULT_MIN_INSIDER_REPETITIONS = 3
DEFAULT_WHALE_SCORE_THRESHOLD = 70
DEFAULT_CLUSTER_SIMILARITY_THRESHOLD = 0.8
DEFAULT_CONSISTENCY_THRESHOLD = 0.8


@dataclass(frozen=True)
class DetectionSettings:
    """Typed detection thresholds. Validated on construction."""

    early_entry_window_seconds: int = DEFAULT_EARLY_ENTRY_WINDOW_SECONDS
    """Seconds after token creation during which a buy counts as early."""
    min_buy_size_sol: float = DEFAULT_MIN_BUY_SIZE_SOL
    """Average buy size (SOL) considered large; also the insider confidence threshold."""
    min_insider_repetitions: int = DEFAULT_MIN_INSIDER_REPETITIONS
    """Early entries required before a wallet can be flagged insider."""
    whale_score_threshold: int = DEFAULT_WHALE_SCORE_THRESHOLD
    """Whale score at or above which a wallet is treated as a whale."""
    cluster_similarity_threshold: float = DEFAULT_CLUSTER_SIMILARITY_THRESHOLD
    consistency_threshold: float = DEFAULT_CONSISTENCY_THRESHOLD

    def __post_init__(self) -> None:
        if self.early_entry_window_seconds < 0:
            raise ConfigurationError(
                "early_entry_window_seconds must be >= 0",
                value=self.early_entry_window_seconds,
            )
        if not math.isfinite(self.min_buy_size_sol) or self.min_buy_size_sol <= 0:
            raise ConfigurationError(
                "min_buy_size_sol must be a positive number",
                value=self.min_buy_size_sol,
            )
        if self.min_insider_repetitions < 0:
            raise ConfigurationError(
                "min_insider_repetitions must be >= 0",
                value=self.min_insider_repetitions,
            )
        if not 0 <= self.whale_score_threshold <= 100:
            raise ConfigurationError(
                "whale_score_threshold must be in [0, 100]",
                value=self.whale_score_threshold,
            )
        if not math.isfinite(self.cluster_similarity_threshold):
            raise ConfigurationError(
                "cluster_similarity_threshold must be finite",
                value=self.cluster_similarity_threshold,
            )
        if not 0.0 <= self.consistency_threshold <= 1.0:
            raise ConfigurationError(
                "consistency_threshold must be in [0, 1]",
                value=self.consistency_threshold,
            )

    @classmethod
    def defaults(cls) -> DetectionSettings:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_settings() -> DetectionSettings:
    """
    Return detection settings from the environment.

    Reads EARLY_ENTRY_WINDOW_SECONDS, MIN_BUY_SIZE_SOL, MIN_INSIDER_REPETITIONS,
    WHALE_SCORE_THRESHOLD, CLUSTER_SIMILARITY_THRESHOLD and
    PATTERN_CONSISTENCY_THRESHOLD; unset variables keep their defaults.

    Raises:
        ConfigurationError: a variable is not a number or is out of range.
    """
    load_whale_env()
    return DetectionSettings(
        early_entry_window_seconds=get_env_int(
            "EARLY_ENTRY_WINDOW_SECONDS", DEFAULT_EARLY_ENTRY_WINDOW_SECONDS
        ),
        min_buy_size_sol=get_env_float("MIN_BUY_SIZE_SOL", DEFAULT_MIN_BUY_SIZE_SOL),
        min_insider_repetitions=get_env_int(
            "MIN_INSIDER_REPETITIONS", DEFAULT_MIN_INSIDER_REPETITIONS
        ),
        whale_score_threshold=get_env_int(
            "WHALE_SCORE_THRESHOLD", DEFAULT_WHALE_SCORE_THRESHOLD
        ),
        cluster_similarity_threshold=get_env_float(
            "CLUSTER_SIMILARITY_THRESHOLD", DEFAULT_CLUSTER_SIMILARITY_THRESHOLD
        ),
        consistency_threshold=get_env_float(
            "PATTERN_CONSISTENCY_THRESHOLD", DEFAULT_CONSISTENCY_THRESHOLD
        ),
    )
