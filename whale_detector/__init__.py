"""
Whale Detector: behavioral scoring for Solana wallets.

Scores wallets from their token-purchase history to flag whale and insider
trading patterns. Pure analytics core: interaction records in, wallet stats,
scores and clusters out. Ingestion, storage and alert delivery live elsewhere.
"""

__version__ = "0.1.0"
