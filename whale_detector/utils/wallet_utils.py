"""Wallet address and amount helpers."""

from __future__ import annotations

import hashlib

LAMPORTS_PER_SOL = 1_000_000_000


def hash_wallet_address(address: str) -> str:
    """Return the hex SHA-256 digest of address, for stable lookup keys."""
    return hashlib.sha256(address.encode("utf-8")).hexdigest()


def lamports_to_sol(lamports: int | float) -> float:
    return lamports / LAMPORTS_PER_SOL


def format_sol(lamports: int | float) -> str:
    """Render a lamport amount as SOL with 4 decimals, e.g. 1500000000 -> "1.5000"."""
    return f"{lamports / LAMPORTS_PER_SOL:.4f}"


def format_address(address: str, start: int = 4, end: int = 4) -> str:
    """Shorten an address to its first `start` and last `end` characters."""
    if len(address) <= start + end:
        return address
    return f"{address[:start]}...{address[len(address) - end:]}"
