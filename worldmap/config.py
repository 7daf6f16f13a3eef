"""
Worldmap Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Zone partition (tiles per interest-management zone)
    ZONE_WIDTH: int = int(os.getenv("WORLDMAP_ZONE_WIDTH", "28"))
    ZONE_HEIGHT: int = int(os.getenv("WORLDMAP_ZONE_HEIGHT", "12"))

    # Default world description used by the CLI when no path is given
    MAP_PATH: str | None = os.getenv("WORLDMAP_MAP_PATH")

    # Seed for spawn sampling; None means nondeterministic
    RANDOM_SEED: int | None = _optional_int("WORLDMAP_RANDOM_SEED")

    # Logging
    LOG_LEVEL: str = os.getenv("WORLDMAP_LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.ZONE_WIDTH <= 0 or cls.ZONE_HEIGHT <= 0:
            raise ValueError(
                "WORLDMAP_ZONE_WIDTH and WORLDMAP_ZONE_HEIGHT must be positive "
                f"(got {cls.ZONE_WIDTH}x{cls.ZONE_HEIGHT})"
            )

        if cls.LOG_LEVEL.upper() not in ("ERROR", "INFO", "DEBUG"):
            raise ValueError(
                f"WORLDMAP_LOG_LEVEL must be one of ERROR, INFO, DEBUG (got {cls.LOG_LEVEL!r})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Worldmap Configuration:",
            f"  Zone Size: {cls.ZONE_WIDTH}x{cls.ZONE_HEIGHT} tiles",
            f"  Map Path: {cls.MAP_PATH or '(none)'}",
            f"  Random Seed: {cls.RANDOM_SEED if cls.RANDOM_SEED is not None else '(none)'}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
