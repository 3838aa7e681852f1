"""
Tilepath Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Library defaults loaded from environment variables."""

    # Movement
    # Speed handed to the engine when follow() is called without one. Units are
    # whatever the host's movement system uses (pixels/second in tile engines).
    DEFAULT_SPEED: float = float(os.getenv("TILEPATH_DEFAULT_SPEED", "100"))

    # Coordinate glue
    # Pixel -> tile conversion is a right shift; 4 means 16px tiles.
    DEFAULT_TILE_SCALE: int = int(os.getenv("TILEPATH_TILE_SCALE", "4"))

    # Seconds between is_moving() polls while waiting for a leg to finish.
    # 0 yields exactly one event loop turn per poll.
    IDLE_POLL_INTERVAL: float = float(os.getenv("TILEPATH_IDLE_POLL_INTERVAL", "0"))

    # Logging
    VERBOSE: bool = bool(os.getenv("TILEPATH_VERBOSE"))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are out of range."""
        if cls.DEFAULT_SPEED <= 0:
            raise ValueError(
                "TILEPATH_DEFAULT_SPEED must be positive "
                f"(got {cls.DEFAULT_SPEED})"
            )

        if cls.DEFAULT_TILE_SCALE < 0:
            raise ValueError(
                "TILEPATH_TILE_SCALE must be >= 0 "
                f"(got {cls.DEFAULT_TILE_SCALE}); use 4 for 16px tiles"
            )

        if cls.IDLE_POLL_INTERVAL < 0:
            raise ValueError(
                "TILEPATH_IDLE_POLL_INTERVAL must be >= 0 "
                f"(got {cls.IDLE_POLL_INTERVAL})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Tilepath Configuration:",
            f"  Default Speed: {cls.DEFAULT_SPEED}",
            f"  Tile Scale: {cls.DEFAULT_TILE_SCALE} ({1 << cls.DEFAULT_TILE_SCALE}px tiles)",
            f"  Idle Poll Interval: {cls.IDLE_POLL_INTERVAL}s",
            f"  Verbose: {cls.VERBOSE}",
        ]
        return "\n".join(lines)
