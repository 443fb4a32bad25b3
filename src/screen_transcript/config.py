"""Runtime defaults, overridable from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

DEFAULT_PTY_ROWS = 40


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass
class Config:
    """Replay and projection settings, from SCREEN_TRANSCRIPT_* env vars or defaults."""

    # Height of the mirror projection; matches the PTY the screens come from
    mirror_rows: int = field(default_factory=lambda: _env_int("SCREEN_TRANSCRIPT_ROWS", DEFAULT_PTY_ROWS))

    # Recorded screens are stored one after another, split by this string
    snapshot_separator: str = "\f"

    log_level: str = field(
        default_factory=lambda: os.environ.get("SCREEN_TRANSCRIPT_LOG_LEVEL", "WARNING")
    )  # any logging level name

    def resolve_log_level(self) -> int:
        """Translate ``log_level`` into a logging constant, defaulting to WARNING."""
        level = logging.getLevelName(self.log_level.strip().upper())
        if isinstance(level, int):
            return level
        return logging.WARNING
