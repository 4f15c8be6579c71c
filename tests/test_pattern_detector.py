"""
Pytest tests for the insider pattern gate and purchase-size consistency.
"""

from __future__ import annotations

import math

import pytest

from whale_detector.analytics.pattern_detector import PatternDetector
from whale_detector.config.settings import DetectionSettings
from whale_detector.core.exceptions import InvalidInputError


@pytest.fixture
def detector() -> PatternDetector:
    return PatternDetector(min_early_entries=2, min_avg_buy_size=5.0, consistency_threshold=0.8)


def _buys(factory, amounts, early=True):
    return [factory("addr1", a, early=early, mint=f"token{i}", block_time=1000 * (i + 1)) for i, a in enumerate(amounts)]


# --- detect_pattern ---


def test_detect_pattern_two_early_large_buys(detector, interaction_factory):
    """Two early buys averaging 11 SOL pass a 2-entry / 5 SOL gate."""
    assert detector.detect_pattern(_buys(interaction_factory, [10.0, 12.0])) is True


def test_detect_pattern_too_few_interactions(detector, interaction_factory):
    assert detector.detect_pattern(_buys(interaction_factory, [50.0])) is False


def test_detect_pattern_not_enough_early(detector, interaction_factory):
    """Enough records but only one early-flagged."""
    interactions = _buys(interaction_factory, [10.0], early=True) + _buys(interaction_factory, [10.0, 10.0], early=False)
    assert detector.detect_pattern(interactions) is False


def test_detect_pattern_small_buys(detector, interaction_factory):
    """Mean over all interactions (not just early ones) below threshold fails."""
    assert detector.detect_pattern(_buys(interaction_factory, [4.0, 5.0])) is False
    interactions = _buys(interaction_factory, [8.0, 8.0]) + _buys(interaction_factory, [0.5, 0.5], early=False)
    assert detector.detect_pattern(interactions) is False


def test_detect_pattern_threshold_inclusive(detector, interaction_factory):
    assert detector.detect_pattern(_buys(interaction_factory, [5.0, 5.0])) is True


def test_detect_pattern_empty_is_false(interaction_factory):
    """No records is never a pattern, even with zero thresholds."""
    lenient = PatternDetector(min_early_entries=0, min_avg_buy_size=0.0, consistency_threshold=0.0)
    assert lenient.detect_pattern([]) is False


# --- consistency_score ---


def test_consistency_identical_sizes(detector, interaction_factory):
    """Zero variance -> CV 0 -> 100."""
    assert detector.consistency_score(_buys(interaction_factory, [10.0, 10.0, 10.0])) == 100.0


def test_consistency_small_sample(detector, interaction_factory):
    """Fewer than 3 interactions scores 0."""
    assert detector.consistency_score([]) == 0.0
    assert detector.consistency_score(_buys(interaction_factory, [10.0, 10.0])) == 0.0


def test_consistency_population_cv(detector, interaction_factory):
    """[1, 2, 3]: mean 2, population std sqrt(2/3), CV ~0.408."""
    expected = (1.0 - math.sqrt(2.0 / 3.0) / 2.0) * 100.0
    assert detector.consistency_score(_buys(interaction_factory, [1.0, 2.0, 3.0])) == pytest.approx(expected)


def test_consistency_high_variance_floors_at_zero(detector, interaction_factory):
    """CV >= 1 floors the score at 0."""
    assert detector.consistency_score(_buys(interaction_factory, [0.0, 0.0, 30.0])) == 0.0


def test_consistency_zero_mean_raises(detector, interaction_factory):
    with pytest.raises(InvalidInputError):
        detector.consistency_score(_buys(interaction_factory, [0.0, 0.0, 0.0]))


def test_consistency_score_range(detector, interaction_factory):
    for amounts in ([1.0, 1.1, 0.9], [5.0, 50.0, 500.0], [0.01, 100.0, 3.0, 7.0], [2.0] * 10):
        score = detector.consistency_score(_buys(interaction_factory, amounts))
        assert 0.0 <= score <= 100.0


def test_is_consistent(detector, interaction_factory):
    assert detector.is_consistent(_buys(interaction_factory, [10.0, 10.0, 10.0])) is True
    # ~59 / 100 < 0.8
    assert detector.is_consistent(_buys(interaction_factory, [1.0, 2.0, 3.0])) is False


# --- construction ---


def test_from_settings():
    settings = DetectionSettings(min_buy_size_sol=7.5, min_insider_repetitions=4, consistency_threshold=0.6)
    detector = PatternDetector.from_settings(settings)
    assert detector.min_early_entries == 4
    assert detector.min_avg_buy_size == 7.5
    assert detector.consistency_threshold == 0.6


def test_invalid_parameters():
    with pytest.raises(InvalidInputError):
        PatternDetector(min_early_entries=-1, min_avg_buy_size=5.0, consistency_threshold=0.8)
    with pytest.raises(InvalidInputError):
        PatternDetector(min_early_entries=2, min_avg_buy_size=-5.0, consistency_threshold=0.8)
    with pytest.raises(InvalidInputError):
        PatternDetector(min_early_entries=2, min_avg_buy_size=5.0, consistency_threshold=1.5)
