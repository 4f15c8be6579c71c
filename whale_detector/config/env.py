"""
Environment variable loading and parsing for Whale Detector.

- Loads .env from project root when available.
- Typed getters (int / float) that fall back to a default when the variable
  is unset or blank and raise ConfigurationError when it cannot be parsed.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from whale_detector.core.exceptions import ConfigurationError

# Project root: config is whale_detector/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"


def load_whale_env(path: Path | None = None) -> None:
    """Load .env from project root (or path). Safe to call multiple times; never overrides set vars."""
    load_dotenv(path or _ENV_PATH, override=False)


def _raw(name: str) -> str:
    return (os.getenv(name) or "").strip()


def get_env_int(name: str, default: int) -> int:
    """Return env var as int; default when unset or blank."""
    raw = _raw(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", variable=name, value=raw) from e


def get_env_float(name: str, default: float) -> float:
    """Return env var as float; default when unset or blank."""
    raw = _raw(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", variable=name, value=raw) from e
