"""
Structured logging for Whale Detector.

JSON logs with timestamp, wallet, event_type and score context.
Use get_logger() in all analytics modules for aggregation-friendly output.
"""

from whale_detector.whale_logging.logger import bind_wallet, get_logger

__all__ = ["get_logger", "bind_wallet"]
