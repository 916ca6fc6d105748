"""Centralized configuration for the analytics engine.

Loads configuration from the environment (optionally seeded by a .env file)
or from a YAML document, and provides typed access to settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from ..analytics.aggregator import DEFAULT_PRODUCTIVE_CATEGORIES
from ..analytics.time_windows import PERIOD_DAYS, compute_period_window
from ..core.time import resolve_timezone
from ..observability.loguru_config import get_logger

__all__ = [
    "DEFAULT_PRODUCTIVE_CATEGORIES",
    "ConfigError",
    "Settings",
    "get_settings",
    "load_env_file",
    "load_settings",
    "parse_str_set",
]

REPORTING_PERIODS = tuple(PERIOD_DAYS)


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class Settings:
    """Settings for the analytics engine.

    Attributes
    ----------
    timezone : str
        IANA timezone used for local day, hour and week keys
    productive_categories : frozenset[str]
        Categories counted as productive time
    streak_max_days : int
        Safety bound on the streak walk
    weekly_weeks : int
        Number of most recent week buckets kept in the weekly comparison
    week_start_on : int
        Day weeks start on (0=Monday, 6=Sunday)
    default_period : str
        Reporting period used when the caller does not pick one
    log_level : str
        Logging level
    log_dir : Path | None
        Directory for JSON log files
    """

    timezone: str = "UTC"
    productive_categories: frozenset[str] = field(default_factory=lambda: DEFAULT_PRODUCTIVE_CATEGORIES)
    streak_max_days: int = 365
    weekly_weeks: int = 4
    week_start_on: int = 0
    default_period: str = "30d"

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if isinstance(self.productive_categories, str):
            self.productive_categories = parse_str_set(self.productive_categories)
        else:
            self.productive_categories = frozenset(self.productive_categories)

        if self.log_dir and isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

        try:
            resolve_timezone(self.timezone)
        except ValueError as exc:
            raise ConfigError(f"{exc}. Use an IANA name such as 'UTC' or 'Europe/Brussels'") from exc

        if self.streak_max_days < 1:
            raise ConfigError(f"streak_max_days must be positive, got {self.streak_max_days}")

        if self.weekly_weeks < 1:
            raise ConfigError(f"weekly_weeks must be positive, got {self.weekly_weeks}")

        if not 0 <= self.week_start_on <= 6:
            raise ConfigError(f"week_start_on must be 0..6 (0=Monday), got {self.week_start_on}")

        if self.default_period not in REPORTING_PERIODS:
            raise ConfigError(
                f"default_period must be one of {', '.join(REPORTING_PERIODS)}, got {self.default_period!r}"
            )

        self.log_level = self.log_level.upper()

    def reporting_window(self, now: datetime | None = None, period: str | None = None) -> tuple[str, str]:
        """UTC bounds for ``period`` (default: ``default_period``) in the configured timezone."""
        return compute_period_window(now, period or self.default_period, self.timezone)

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> Settings:
        """Load settings from environment.

        Loads from .env file if present, then reads ``CHRONICLE_*`` variables.

        Parameters
        ----------
        env_file
            Path to .env file (default: .env in current directory)

        Returns
        -------
        Settings
            Loaded settings

        Raises
        ------
        ConfigError
            If settings are invalid
        """
        if env_file is None:
            env_file = Path(".env")

        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_env_file(env_file)

        env = os.environ
        try:
            return cls(
                timezone=env.get("CHRONICLE_TIMEZONE", "UTC"),
                productive_categories=(
                    parse_str_set(env["CHRONICLE_PRODUCTIVE_CATEGORIES"])
                    if "CHRONICLE_PRODUCTIVE_CATEGORIES" in env
                    else DEFAULT_PRODUCTIVE_CATEGORIES
                ),
                streak_max_days=int(env.get("CHRONICLE_STREAK_MAX_DAYS", "365")),
                weekly_weeks=int(env.get("CHRONICLE_WEEKLY_WEEKS", "4")),
                week_start_on=int(env.get("CHRONICLE_WEEK_START_ON", "0")),
                default_period=env.get("CHRONICLE_DEFAULT_PERIOD", "30d"),
                log_level=env.get("CHRONICLE_LOG_LEVEL", "INFO"),
                log_dir=Path(env["CHRONICLE_LOG_DIR"]) if "CHRONICLE_LOG_DIR" in env else None,
            )
        except (ValueError, KeyError) as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML document.

        Expected layout::

            analytics:
              timezone: Europe/Brussels
              productive_categories: [work, education, reading]
              streak_max_days: 365
              weekly_weeks: 4
              week_start_on: 0
              default_period: 30d
            logging:
              level: INFO
              dir: logs

        Raises
        ------
        ConfigError
            If the file is missing, unreadable or holds invalid values
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load config from {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from a nested ``analytics``/``logging`` mapping."""
        analytics = data.get("analytics") or {}
        logging_section = data.get("logging") or {}

        kwargs: dict[str, Any] = {}
        for key in ("timezone", "default_period"):
            if key in analytics:
                kwargs[key] = str(analytics[key])

        try:
            for key in ("streak_max_days", "weekly_weeks", "week_start_on"):
                if key in analytics:
                    kwargs[key] = int(analytics[key])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

        if "productive_categories" in analytics:
            categories = analytics["productive_categories"]
            if isinstance(categories, str):
                kwargs["productive_categories"] = parse_str_set(categories)
            else:
                kwargs["productive_categories"] = frozenset(str(c).strip() for c in categories or [])

        if "level" in logging_section:
            kwargs["log_level"] = str(logging_section["level"])
        if logging_section.get("dir"):
            kwargs["log_dir"] = Path(logging_section["dir"])

        return cls(**kwargs)


def load_env_file(env_file: Path) -> None:
    """Load environment variables from .env file.

    Parameters
    ----------
    env_file
        Path to .env file
    """
    with open(env_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            # Skip comments and empty lines
            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]

                os.environ[key] = value


def parse_str_set(value: str) -> frozenset[str]:
    """Parse a comma-separated list into a set of stripped names.

    Parameters
    ----------
    value
        Comma-separated names (e.g. "work, education")

    Returns
    -------
    frozenset[str]
        Parsed names, empty items dropped
    """
    if not value:
        return frozenset()

    return frozenset(item.strip() for item in value.split(",") if item.strip())


_settings: Settings | None = None


def load_settings(env_file: Path | str | None = None) -> Settings:
    """Load settings from environment and make them current.

    Raises
    ------
    ConfigError
        If settings are invalid
    """
    global _settings
    _settings = Settings.from_env(env_file)
    get_logger("config").debug(
        "Settings loaded",
        timezone=_settings.timezone,
        productive_categories=sorted(_settings.productive_categories),
    )
    return _settings


def get_settings() -> Settings:
    """Get current settings, loading them from the environment on first use."""
    if _settings is None:
        return load_settings()
    return _settings
