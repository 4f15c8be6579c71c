"""
Batch analysis pipeline: classify -> aggregate -> score -> detect -> cluster.

Single entrypoint for the CLI and other callers holding a full interaction
log. Returns a JSON-serializable dict with per-wallet results, clusters,
top whales and tokens entered by multiple whales.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping, Sequence
from typing import Any

from whale_detector.analytics.aggregator import aggregate, group_by_wallet
from whale_detector.analytics.entry_classifier import classify_interactions
from whale_detector.analytics.insider_check import check_insider_status
from whale_detector.analytics.models import TokenInteraction, WalletStats
from whale_detector.analytics.pattern_detector import PatternDetector
from whale_detector.analytics.scorer import DynamicScorer, ScoringWeights, insider_confidence
from whale_detector.analytics.wallet_cluster import cluster_wallets
from whale_detector.analytics.whale_watch import find_multiple_whales, top_whales
from whale_detector.config.settings import DetectionSettings
from whale_detector.core.exceptions import InvalidInputError
from whale_detector.whale_logging import get_logger

logger = get_logger(__name__)


def run_batch_analysis(
    interactions: Sequence[TokenInteraction],
    settings: DetectionSettings | None = None,
    creation_times: Mapping[str, int] | None = None,
    weights: ScoringWeights | None = None,
) -> dict[str, Any]:
    """
    Run full analysis over an interaction log covering any number of wallets.

    When creation_times is given, interactions are (re)classified as early
    entries first; otherwise their is_early_entry flags are used as supplied.

    Returns dict: wallets (address -> stats, whale_score, insider_confidence,
    insider, pattern_detected, consistency_score), clusters, top_whales,
    multiple_whales. consistency_score is None when the wallet's mean buy size is 0.
    """
    settings = settings or DetectionSettings.defaults()
    scorer = DynamicScorer(weights) if weights is not None else DynamicScorer()
    detector = PatternDetector.from_settings(settings)

    logger.info(
        "analysis_pipeline_start",
        interaction_count=len(interactions),
        classify=creation_times is not None,
    )

    if creation_times is not None:
        interactions = classify_interactions(
            interactions, creation_times, settings.early_entry_window_seconds
        )

    grouped = group_by_wallet(interactions)
    stats_by_address: dict[str, WalletStats] = {}
    scores: dict[str, int] = {}
    wallets: dict[str, dict[str, Any]] = {}

    for address in sorted(grouped):
        wallet_interactions = grouped[address]
        stats = aggregate(wallet_interactions)
        stats_by_address[address] = stats
        scores[address] = scorer.score(stats)

        try:
            consistency: float | None = detector.consistency_score(wallet_interactions)
        except InvalidInputError as e:
            logger.debug("analysis_pipeline_consistency_skip", wallet=address, error=e.message)
            consistency = None

        wallets[address] = {
            "stats": stats.to_dict(),
            "whale_score": scores[address],
            "insider_confidence": insider_confidence(
                stats.early_entry_count,
                stats.interaction_count,
                stats.average_entry_size,
                settings.min_buy_size_sol,
                settings.min_insider_repetitions,
            ),
            "insider": check_insider_status(stats, settings).to_dict(),
            "pattern_detected": detector.detect_pattern(wallet_interactions),
            "consistency_score": consistency,
        }

    clusters = cluster_wallets(stats_by_address, settings.cluster_similarity_threshold)
    whales = top_whales(stats_by_address, min_score=settings.whale_score_threshold, scorer=scorer)

    buyers_by_mint: dict[str, list[TokenInteraction]] = defaultdict(list)
    for interaction in interactions:
        if scores[interaction.wallet_address] >= settings.whale_score_threshold:
            buyers_by_mint[interaction.token_mint].append(interaction)

    multiple_whales = []
    for mint in sorted(buyers_by_mint):
        hit = find_multiple_whales(
            mint,
            buyers_by_mint[mint],
            stats_by_address,
            settings.whale_score_threshold,
            scorer=scorer,
            scores=scores,
        )
        if hit is not None:
            multiple_whales.append(hit.to_dict())

    logger.info(
        "analysis_pipeline_done",
        wallet_count=len(wallets),
        cluster_count=len(clusters),
        whale_count=len(whales),
    )
    return {
        "wallets": wallets,
        "clusters": clusters,
        "top_whales": [w.to_dict() for w in whales],
        "multiple_whales": multiple_whales,
    }
