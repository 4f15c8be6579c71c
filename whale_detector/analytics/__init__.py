"""
Whale Detector analytics engine.

Turns wallet purchase history into whale / insider scores.
Modules: models, entry_classifier, aggregator, scorer, pattern_detector,
wallet_cluster, insider_check, whale_watch, analysis_pipeline.
"""

from whale_detector.analytics.aggregator import aggregate, aggregate_by_wallet, group_by_wallet
from whale_detector.analytics.analysis_pipeline import run_batch_analysis
from whale_detector.analytics.entry_classifier import classify_interactions, is_early_entry
from whale_detector.analytics.insider_check import InsiderCheckResult, check_insider_status
from whale_detector.analytics.models import TokenInteraction, WalletStats
from whale_detector.analytics.pattern_detector import PatternDetector
from whale_detector.analytics.scorer import (
    DynamicScorer,
    ScoringWeights,
    default_weights,
    insider_confidence,
    whale_score,
)
from whale_detector.analytics.wallet_cluster import WalletClusterer, cluster_wallets, similarity
from whale_detector.analytics.whale_watch import (
    MultipleWhalesResult,
    WhaleRanking,
    find_multiple_whales,
    top_whales,
)

__all__ = [
    "TokenInteraction",
    "WalletStats",
    "is_early_entry",
    "classify_interactions",
    "aggregate",
    "aggregate_by_wallet",
    "group_by_wallet",
    "whale_score",
    "insider_confidence",
    "ScoringWeights",
    "default_weights",
    "DynamicScorer",
    "PatternDetector",
    "similarity",
    "cluster_wallets",
    "WalletClusterer",
    "InsiderCheckResult",
    "check_insider_status",
    "WhaleRanking",
    "MultipleWhalesResult",
    "top_whales",
    "find_multiple_whales",
    "run_batch_analysis",
]
