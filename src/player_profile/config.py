"""Centralized engine configuration resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from player_profile.core.paths import DEFAULT_SNAPSHOT_LOG

# Defaults used when corresponding environment variables are not set.
DEFAULT_MAX_ROUNDS = 50
DEFAULT_MAX_MOVES = 50
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ProfileConfig:
    """Resolved settings for the profile engine and its CLI."""

    max_rounds: int = DEFAULT_MAX_ROUNDS
    max_moves: int = DEFAULT_MAX_MOVES
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[Path] = None
    snapshot_log_path: Path = DEFAULT_SNAPSHOT_LOG


def _read_positive_int(name: str, default: int) -> int:
    """Parse a positive integer from the environment variable named ``name``."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")
    return value


def _read_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {sorted(LOG_LEVELS)}, got {raw!r}.")
    return level


def _read_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip())


def load_profile_config() -> ProfileConfig:
    """Load and validate engine configuration from environment variables."""
    return ProfileConfig(
        max_rounds=_read_positive_int("PROFILE_MAX_ROUNDS", DEFAULT_MAX_ROUNDS),
        max_moves=_read_positive_int("PROFILE_MAX_MOVES", DEFAULT_MAX_MOVES),
        log_level=_read_log_level("PROFILE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_dir=_read_path("PROFILE_LOG_DIR", None),
        snapshot_log_path=_read_path("PROFILE_SNAPSHOT_LOG_PATH", DEFAULT_SNAPSHOT_LOG)
        or DEFAULT_SNAPSHOT_LOG,
    )


__all__ = ["ProfileConfig", "load_profile_config"]
