"""
Score wallets from an interaction log CSV.

Reads one purchase per row, runs the batch analysis pipeline and writes a
per-wallet score table (CSV) or the full result (JSON).

Input columns:
  wallet_address, token_mint, block_time, sol_amount   (required)
  is_early_entry                                       (optional, bool)
  token_creation_time                                  (optional; when present,
                                                        rows are classified with --window)

Usage:
  whale-score interactions.csv -o scores.csv
  python -m whale_detector.tools.score_wallets interactions.csv --json
"""

from __future__ import annotations

import argparse
import json
import math
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import pandas as pd

from whale_detector.analytics.analysis_pipeline import run_batch_analysis
from whale_detector.analytics.models import TokenInteraction
from whale_detector.config.settings import get_settings
from whale_detector.core.exceptions import InvalidInputError, WhaleDetectorError
from whale_detector.utils.wallet_utils import format_address, hash_wallet_address, lamports_to_sol
from whale_detector.whale_logging import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("wallet_address", "token_mint", "block_time", "sol_amount")

SCORE_COLUMNS = [
    "wallet",
    "wallet_hash",
    "cluster_id",
    "whale_score",
    "insider_confidence",
    "is_insider",
    "pattern_detected",
    "consistency_score",
    "interaction_count",
    "early_entry_count",
    "total_volume_sol",
    "average_entry_size",
    "winrate_proxy",
]

_TRUE_STRINGS = frozenset({"1", "true", "t", "yes", "y"})


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return False
    return bool(value)


def load_interactions(
    path: Path,
    amounts_in_lamports: bool = False,
) -> tuple[list[TokenInteraction], dict[str, int] | None]:
    """
    Load interactions (and token creation times, if the column exists) from CSV.

    Raises:
        InvalidInputError: required columns are missing or a row cannot be parsed.
    """
    try:
        df = pd.read_csv(path, dtype={"wallet_address": str, "token_mint": str})
    except pd.errors.EmptyDataError as e:
        raise InvalidInputError("interaction file is empty", path=str(path)) from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise InvalidInputError(f"cannot parse interaction file: {e}", path=str(path)) from e
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidInputError(f"missing required columns: {', '.join(missing)}", path=str(path))

    creation_times: dict[str, int] | None = None
    if "token_creation_time" in df.columns:
        known = df.dropna(subset=["token_creation_time"])
        try:
            creation_times = {
                str(mint): int(ts)
                for mint, ts in known.groupby("token_mint")["token_creation_time"].min().items()
            }
        except (TypeError, ValueError) as e:
            raise InvalidInputError(
                f"invalid token_creation_time: {e}", path=str(path)
            ) from e

    interactions: list[TokenInteraction] = []
    for line_no, row in enumerate(df.to_dict(orient="records"), start=2):
        try:
            amount = float(row["sol_amount"])
            interactions.append(
                TokenInteraction(
                    wallet_address=str(row["wallet_address"]).strip(),
                    token_mint=str(row["token_mint"]).strip(),
                    block_time=int(row["block_time"]),
                    sol_amount=lamports_to_sol(amount) if amounts_in_lamports else amount,
                    is_early_entry=_parse_bool(row.get("is_early_entry")),
                )
            )
        except InvalidInputError:
            raise
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"invalid row at line {line_no}: {e}", path=str(path), line=line_no) from e
    return interactions, creation_times


def build_score_table(result: dict[str, Any]) -> pd.DataFrame:
    """Flatten run_batch_analysis output into one row per wallet."""
    cluster_of: dict[str, int] = {}
    for cluster_id, members in enumerate(result["clusters"]):
        for address in members:
            cluster_of[address] = cluster_id

    rows = []
    for address, wallet in result["wallets"].items():
        stats = wallet["stats"]
        rows.append({
            "wallet": address,
            "wallet_hash": hash_wallet_address(address),
            "cluster_id": cluster_of.get(address),
            "whale_score": wallet["whale_score"],
            "insider_confidence": wallet["insider_confidence"],
            "is_insider": wallet["insider"]["is_insider"],
            "pattern_detected": wallet["pattern_detected"],
            "consistency_score": wallet["consistency_score"],
            "interaction_count": stats["interaction_count"],
            "early_entry_count": stats["early_entry_count"],
            "total_volume_sol": stats["total_volume_sol"],
            "average_entry_size": stats["average_entry_size"],
            "winrate_proxy": stats["winrate_proxy"],
        })
    df = pd.DataFrame(rows, columns=SCORE_COLUMNS)
    return df.sort_values(["whale_score", "wallet"], ascending=[False, True]).reset_index(drop=True)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="whale-score",
        description="Score wallets for whale and insider behavior from an interaction CSV.",
    )
    parser.add_argument("input", type=Path, help="Interaction log CSV")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write score table CSV here (default: stdout)")
    parser.add_argument("--window", type=int, default=None, help="Early-entry window in seconds (overrides EARLY_ENTRY_WINDOW_SECONDS)")
    parser.add_argument(
        "--similarity-threshold",
        type=float,
        default=None,
        help="Cluster similarity threshold (overrides CLUSTER_SIMILARITY_THRESHOLD)",
    )
    parser.add_argument("--lamports", action="store_true", help="sol_amount column is in lamports")
    parser.add_argument("--json", action="store_true", help="Print the full analysis result as JSON")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if not args.input.is_file():
        print(f"[whale-score] ERROR: input not found: {args.input}", file=sys.stderr)
        return 1

    try:
        settings = get_settings()
        if args.window is not None:
            settings = replace(settings, early_entry_window_seconds=args.window)
        if args.similarity_threshold is not None:
            settings = replace(settings, cluster_similarity_threshold=args.similarity_threshold)

        interactions, creation_times = load_interactions(args.input, amounts_in_lamports=args.lamports)
        logger.info(
            "score_wallets_loaded",
            path=str(args.input),
            interaction_count=len(interactions),
            classify=creation_times is not None,
        )
        result = run_batch_analysis(interactions, settings=settings, creation_times=creation_times)
    except WhaleDetectorError as e:
        logger.error("score_wallets_failed", path=str(args.input), error=e.message, code=e.code)
        print(f"[whale-score] ERROR: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result, indent=2))
        return 0

    table = build_score_table(result)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(args.output, index=False)
        print(f"[whale-score] saved {len(table)} wallets to {args.output}", file=sys.stderr)
    else:
        table.to_csv(sys.stdout, index=False)

    for whale in result["top_whales"]:
        print(
            f"[whale-score] whale {format_address(whale['address'])} score={whale['score']}",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
