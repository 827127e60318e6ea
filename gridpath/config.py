"""
gridpath Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from typing import Any, Optional, Tuple

from dotenv import load_dotenv

from .errors import InvalidConfigurationError
from .schemas import GridConfig

# Load .env file if it exists
load_dotenv()


def parse_coord(text: str, *, field: Optional[str] = None) -> Tuple[int, int]:
    """Parse a ``"row,col"`` string into a coordinate tuple."""

    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise InvalidConfigurationError(f"expected 'row,col', got {text!r}", field=field)
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise InvalidConfigurationError(
            f"expected integer 'row,col', got {text!r}", field=field
        ) from None


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigurationError(f"expected an integer, got {raw!r}", field=name) from None


def _env_coord(name: str) -> Optional[Tuple[int, int]]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return parse_coord(raw, field=name)


class Config:
    """Session configuration read from environment variables.

    Values are read at call time so tests and the CLI can adjust the
    environment before building a ``GridConfig``.
    """

    @classmethod
    def from_env(cls) -> dict:
        """Return the grid settings present in the environment."""
        values = {
            "rows": _env_int("GRIDPATH_ROWS"),
            "cols": _env_int("GRIDPATH_COLS"),
            "start": _env_coord("GRIDPATH_START"),
            "end": _env_coord("GRIDPATH_END"),
            "visit_interval_ms": _env_int("GRIDPATH_VISIT_INTERVAL_MS"),
            "path_interval_ms": _env_int("GRIDPATH_PATH_INTERVAL_MS"),
        }
        return {key: value for key, value in values.items() if value is not None}

    @classmethod
    def grid_config(cls, **overrides: Any) -> GridConfig:
        """Build a validated ``GridConfig``; explicit overrides beat the environment.

        Overrides set to ``None`` are ignored so argparse namespaces can be
        passed through unchanged.
        """
        values = cls.from_env()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return GridConfig.build(**values)

    @classmethod
    def display(cls, config: Optional[GridConfig] = None) -> str:
        """Return a formatted string showing current configuration."""
        config = config or cls.grid_config()
        lines = [
            "gridpath Configuration:",
            f"  Grid: {config.rows}x{config.cols}",
            f"  Start: {config.start}",
            f"  End: {config.end}",
            f"  Visit interval: {config.visit_interval_ms}ms",
            f"  Path interval: {config.path_interval_ms}ms",
        ]
        return "\n".join(lines)
