"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field


def _parse_log_level() -> int:
    """Parse BLACKJACK_LOG_LEVEL as a level name or number."""
    raw = os.getenv("BLACKJACK_LOG_LEVEL", "WARNING").strip().upper()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    starting_credit: int = 100


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(
        default_factory=lambda: os.getenv("BLACKJACK_DEBUG", "false").lower() == "true"
    )
    log_level: int = field(default_factory=_parse_log_level)
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    game: GameConfig = field(default_factory=GameConfig)

    @property
    def effective_log_level(self) -> int:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return logging.DEBUG if self.debug else self.log_level


# Global configuration instance
config = AppConfig()
