"""
Configuration management for Whale Detector.

Loads and validates detection thresholds from environment variables and an
optional .env file. Exposes a single source of truth for scoring settings.
"""

from whale_detector.config.settings import DetectionSettings, get_settings  # noqa: F401

__all__ = ["DetectionSettings", "get_settings"]
