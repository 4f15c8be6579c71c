"""
Rule-based insider check with explainable reasons.

A wallet is flagged insider when it repeatedly buys early and its rule
points reach INSIDER_CONFIDENCE_THRESHOLD. Each rule that fires adds points
and a human-readable reason:

    repeated early entries (>= min_insider_repetitions)     +40
    average entry size >= min_buy_size_sol                  +30
    total volume >= 10 x min_buy_size_sol                   +10
    new buy within the early window of its token            +20
    new buy size >= min_buy_size_sol                        +10
    winrate proxy > 0.6                                     +10

Confidence is capped at 100. All times are seconds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from whale_detector.analytics.entry_classifier import is_early_entry
from whale_detector.analytics.models import TokenInteraction, WalletStats
from whale_detector.config.settings import DetectionSettings
from whale_detector.utils.wallet_utils import format_address
from whale_detector.whale_logging import bind_wallet

INSIDER_CONFIDENCE_THRESHOLD = 50
HIGH_WINRATE_PROXY = 0.6
HIGH_VOLUME_MULTIPLIER = 10.0

POINTS_REPEATED_EARLY = 40
POINTS_LARGE_AVERAGE = 30
POINTS_HIGH_VOLUME = 10
POINTS_VERY_EARLY_BUY = 20
POINTS_LARGE_BUY = 10
POINTS_HIGH_WINRATE = 10


@dataclass
class InsiderCheckResult:
    """Verdict, confidence (0-100) and the reasons behind it."""

    is_insider: bool
    confidence: int
    reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_insider": self.is_insider,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
        }


def check_insider_status(
    stats: WalletStats,
    settings: DetectionSettings | None = None,
    new_interaction: TokenInteraction | None = None,
    token_creation_time: int | None = None,
) -> InsiderCheckResult:
    """
    Check whether a wallet behaves like an insider.

    stats is the wallet's aggregate profile. new_interaction, when given, is
    the buy being evaluated right now; its early-window rule needs
    token_creation_time and is skipped without it.
    """
    settings = settings or DetectionSettings.defaults()
    reasons: list[str] = []
    confidence = 0

    repeated_early = stats.early_entry_count >= settings.min_insider_repetitions
    if repeated_early:
        reasons.append(f"Repeated early entries: {stats.early_entry_count} times")
        confidence += POINTS_REPEATED_EARLY

    if stats.interaction_count > 0:
        if stats.average_entry_size >= settings.min_buy_size_sol:
            reasons.append(f"Large average buy size: {stats.average_entry_size:.2f} SOL")
            confidence += POINTS_LARGE_AVERAGE
        if stats.total_volume_sol >= settings.min_buy_size_sol * HIGH_VOLUME_MULTIPLIER:
            reasons.append(f"High total volume: {stats.total_volume_sol:.2f} SOL")
            confidence += POINTS_HIGH_VOLUME

    if new_interaction is not None:
        if token_creation_time is not None and is_early_entry(
            new_interaction.block_time,
            token_creation_time,
            settings.early_entry_window_seconds,
        ):
            seconds = new_interaction.block_time - token_creation_time
            reasons.append(f"Very early entry: {seconds}s after creation")
            confidence += POINTS_VERY_EARLY_BUY
        if new_interaction.sol_amount >= settings.min_buy_size_sol:
            reasons.append(f"Large buy size: {new_interaction.sol_amount:.2f} SOL")
            confidence += POINTS_LARGE_BUY

    if stats.winrate_proxy > HIGH_WINRATE_PROXY:
        reasons.append(f"High win rate proxy: {stats.winrate_proxy * 100:.1f}%")
        confidence += POINTS_HIGH_WINRATE

    confidence = min(confidence, 100)
    is_insider = confidence >= INSIDER_CONFIDENCE_THRESHOLD and repeated_early

    if is_insider:
        bind_wallet(format_address(stats.address, 8, 8)).info(
            "insider_detected",
            confidence=confidence,
            reasons=reasons,
        )
    return InsiderCheckResult(is_insider=is_insider, confidence=confidence, reasons=reasons)
