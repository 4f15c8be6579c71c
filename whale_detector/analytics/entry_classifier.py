"""
Early-entry classification.

A buy is an early entry when it lands within a fixed window after the token
was created. Events stamped before creation (clock skew) are not early.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping

from whale_detector.analytics.models import TokenInteraction
from whale_detector.whale_logging import get_logger

logger = get_logger(__name__)


def is_early_entry(event_time: int, creation_time: int, window_seconds: int) -> bool:
    """Return True if event_time falls within window_seconds after creation_time (inclusive)."""
    if event_time < creation_time:
        return False
    return event_time - creation_time <= window_seconds


def classify_interactions(
    interactions: Iterable[TokenInteraction],
    creation_times: Mapping[str, int],
    window_seconds: int,
) -> list[TokenInteraction]:
    """
    Return copies of interactions with is_early_entry set.

    creation_times maps token_mint -> creation timestamp (seconds). A token
    with no known creation time uses the event's own block_time as reference,
    so its events count as early.
    """
    out: list[TokenInteraction] = []
    unknown_mints: set[str] = set()
    for interaction in interactions:
        creation_time = creation_times.get(interaction.token_mint)
        if creation_time is None:
            unknown_mints.add(interaction.token_mint)
            creation_time = interaction.block_time
        early = is_early_entry(interaction.block_time, creation_time, window_seconds)
        out.append(dataclasses.replace(interaction, is_early_entry=early))
    if unknown_mints:
        logger.debug(
            "entry_classifier_creation_time_missing",
            mint_count=len(unknown_mints),
            window_seconds=window_seconds,
        )
    return out
