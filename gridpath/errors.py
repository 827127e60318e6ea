"""Exceptions raised by gridpath.

All failures are local and synchronous: nothing in the library retries. An
unreachable end cell is *not* an error, it is a successful search with an
empty path.
"""

from typing import Optional


class GridPathError(Exception):
    """Base class for every error raised by the library."""


class OutOfBoundsError(GridPathError, IndexError):
    """Raised when a coordinate falls outside the grid."""

    def __init__(self, *, row: int, col: int, rows: int, cols: int) -> None:
        self.row = row
        self.col = col
        self.rows = rows
        self.cols = cols
        message = (
            f"Cell ({row}, {col}) is outside the {rows}x{cols} grid. "
            f"Valid rows are 0..{rows - 1}, valid columns are 0..{cols - 1}."
        )
        super().__init__(message)


class InvalidConfigurationError(GridPathError, ValueError):
    """Raised when grid or replay settings cannot be honoured.

    Covers non-positive dimensions, start/end coordinates outside the grid and
    negative animation intervals.
    """

    def __init__(self, reason: str, *, field: Optional[str] = None) -> None:
        self.reason = reason
        self.field = field
        message = f"Invalid configuration: {reason}"
        if field:
            message = f"Invalid configuration ({field}): {reason}"
        message += (
            "\n\nRemediation tips:\n"
            "  - rows and cols must be positive integers\n"
            "  - start and end must be 'row,col' pairs inside the grid\n"
            "  - visit/path intervals are milliseconds and must be >= 0"
        )
        super().__init__(message)


class ReentrantRunError(GridPathError, RuntimeError):
    """Raised when a run, reset or wall edit is attempted during an active run."""

    def __init__(self, action: str = "run") -> None:
        self.action = action
        super().__init__(
            f"Cannot {action} while a visualization is in flight. "
            "Wait for the replay to complete or cancel it first."
        )

