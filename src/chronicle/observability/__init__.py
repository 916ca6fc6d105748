"""Observability module for chronicle.

Provides logging and timing instrumentation.
"""

from .loguru_config import configure_from_settings, configure_loguru, get_logger, log_timing, timing_context

__all__ = [
    "configure_from_settings",
    "configure_loguru",
    "get_logger",
    "log_timing",
    "timing_context",
]
