"""Loguru configuration with timing for the analytics engine.

This module provides centralized loguru configuration with:
- Console output for development
- Structured JSON log files when a log directory is configured
- Context managers and decorators for timing operations
"""

from __future__ import annotations

import functools
import sys
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

    from ..config.settings import Settings

__all__ = [
    "configure_from_settings",
    "configure_loguru",
    "get_logger",
    "log_timing",
    "timing_context",
]

F = TypeVar("F", bound=Callable[..., Any])

COMPONENTS = ("analytics", "config")


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "100 MB",
    retention: str = "10 days",
    compression: str = "zip",
    enable_console: bool = True,
    enable_timing_logs: bool = True,
) -> None:
    """Configure loguru with structured logging and timing support.

    Parameters
    ----------
    log_dir
        Directory for JSON log files (None disables file sinks)
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "100 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days", "1 week")
    compression
        Compression for rotated logs (zip, gz, bz2, xz)
    enable_console
        Enable console output
    enable_timing_logs
        Enable separate timing logs file

    Example
    -------
    >>> from chronicle.observability.loguru_config import configure_loguru
    >>> configure_loguru(log_dir=Path("logs"), level="INFO")
    """
    logger.remove()

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if log_dir is None:
        logger.debug("Loguru configured", level=level)
        return

    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "chronicle.jsonl",
        format="{message}",
        level=level,
        rotation=rotation,
        retention=retention,
        compression=compression,
        serialize=True,
        backtrace=True,
        diagnose=False,
    )

    if enable_timing_logs:
        logger.add(
            log_dir / "timing.jsonl",
            format="{message}",
            level="DEBUG",
            rotation=rotation,
            retention=retention,
            compression=compression,
            serialize=True,
            backtrace=False,
            diagnose=False,
            filter=lambda record: record["extra"].get("timing", False),
        )

    for component in COMPONENTS:
        logger.add(
            log_dir / f"{component}.jsonl",
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            compression=compression,
            serialize=True,
            backtrace=True,
            diagnose=False,
            filter=lambda record, comp=component: record["extra"].get("component") == comp,
        )

    logger.info("Loguru configured", log_dir=str(log_dir), level=level)


def get_logger(component: str = "chronicle") -> Any:
    """Get logger instance bound to specific component.

    Parameters
    ----------
    component
        Component name (analytics, config)

    Returns
    -------
    Logger
        Loguru logger bound to component
    """
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "chronicle",
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Context manager for timing operations.

    Parameters
    ----------
    operation
        Name of the operation being timed
    component
        Component name for filtering logs
    **metadata
        Additional metadata to log

    Yields
    ------
    dict
        Context dictionary that can be updated with additional data

    Example
    -------
    >>> with timing_context("compute_report", component="analytics", entries=12) as ctx:
    ...     report = aggregator.compute(entries)
    ...     ctx["streak_days"] = report.streak_days
    """
    start_ns = time.perf_counter_ns()
    context: dict[str, Any] = dict(metadata)

    bound = logger.bind(component=component, timing=True, operation=operation)
    bound.debug(f"START: {operation}", phase="start", **metadata)

    try:
        yield context
    finally:
        duration_ns = time.perf_counter_ns() - start_ns
        bound.debug(
            f"END: {operation}",
            phase="end",
            duration_ms=duration_ns / 1_000_000,
            duration_ns=duration_ns,
            **context,
        )


def log_timing(component: str = "chronicle") -> Callable[[F], F]:
    """Decorator for automatic function timing.

    Example
    -------
    >>> @log_timing(component="analytics")
    ... def compute(entries):
    ...     ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            operation = f"{func.__module__}.{func.__name__}"
            with timing_context(operation, component=component):
                return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def configure_from_settings(settings: Settings) -> None:
    """Configure loguru from loaded settings."""
    configure_loguru(log_dir=settings.log_dir, level=settings.log_level)
