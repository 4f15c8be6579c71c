"""
Core utilities: shared exceptions and cross-cutting concerns.

Used across the analytics modules, configuration layer and CLI.
"""

from whale_detector.core.exceptions import (
    ConfigurationError,
    InvalidInputError,
    WhaleDetectorError,
)

__all__ = ["WhaleDetectorError", "InvalidInputError", "ConfigurationError"]
