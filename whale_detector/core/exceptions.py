"""
Application-level exceptions.

Every analytics function is total over its documented domain; inputs that
would otherwise produce NaN or Infinity (zero thresholds, zero-mean samples,
negative amounts) raise InvalidInputError instead. Each error carries a
stable code for API and CLI error handling.
"""

from __future__ import annotations

from typing import Any


class WhaleDetectorError(Exception):
    """Base error for whale_detector."""

    code = "whale_detector_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class InvalidInputError(WhaleDetectorError, ValueError):
    """Raised when an input falls outside the domain a formula is defined on."""

    code = "invalid_input"


class ConfigurationError(WhaleDetectorError):
    """Raised when an environment setting cannot be parsed or is out of range."""

    code = "invalid_config"
