"""
Whale watch: rank wallets by whale score and spot tokens that several
whales entered.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from whale_detector.analytics.models import TokenInteraction, WalletStats
from whale_detector.analytics.scorer import DynamicScorer, whale_score
from whale_detector.whale_logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOP_WHALES_LIMIT = 10
MIN_WHALES_FOR_ALERT = 2


@dataclass(frozen=True)
class WhaleRanking:
    address: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "score": self.score}


@dataclass
class MultipleWhalesResult:
    """Whales (score >= threshold) that bought the same token."""

    token_mint: str
    whales: list[WhaleRanking] = field(default_factory=list)

    @property
    def whale_count(self) -> int:
        return len(self.whales)

    def to_dict(self) -> dict[str, Any]:
        return {
            "token_mint": self.token_mint,
            "whale_count": self.whale_count,
            "whales": [w.to_dict() for w in self.whales],
        }


def _score(stats: WalletStats, scorer: DynamicScorer | None) -> int:
    return scorer.score(stats) if scorer is not None else whale_score(stats)


def top_whales(
    stats_by_address: Mapping[str, WalletStats],
    limit: int = DEFAULT_TOP_WHALES_LIMIT,
    min_score: int = 0,
    scorer: DynamicScorer | None = None,
) -> list[WhaleRanking]:
    """
    Wallets with score >= min_score, highest score first (ties by address).

    Scores with whale_score unless a DynamicScorer is given.
    """
    rankings = [
        WhaleRanking(address=address, score=_score(stats, scorer))
        for address, stats in stats_by_address.items()
    ]
    rankings = [r for r in rankings if r.score >= min_score]
    rankings.sort(key=lambda r: (-r.score, r.address))
    return rankings[: max(limit, 0)]


def find_multiple_whales(
    token_mint: str,
    interactions: Iterable[TokenInteraction],
    stats_by_address: Mapping[str, WalletStats],
    score_threshold: int,
    scorer: DynamicScorer | None = None,
    scores: Mapping[str, int] | None = None,
) -> MultipleWhalesResult | None:
    """
    Return the whales that bought token_mint when there are at least two of them.

    interactions may span several tokens; only token_mint's buyers count.
    Buyers missing from stats_by_address are ignored. scores, when given,
    holds precomputed scores by address and is used instead of rescoring.
    """
    buyers = sorted({i.wallet_address for i in interactions if i.token_mint == token_mint})
    whales: list[WhaleRanking] = []
    for address in buyers:
        stats = stats_by_address.get(address)
        if stats is None:
            continue
        score = scores[address] if scores is not None and address in scores else _score(stats, scorer)
        if score >= score_threshold:
            whales.append(WhaleRanking(address=address, score=score))

    if len(whales) < MIN_WHALES_FOR_ALERT:
        return None

    whales.sort(key=lambda r: (-r.score, r.address))
    logger.info(
        "multiple_whales_detected",
        token_mint=token_mint,
        whale_count=len(whales),
        score_threshold=score_threshold,
    )
    return MultipleWhalesResult(token_mint=token_mint, whales=whales)
