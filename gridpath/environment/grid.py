"""Grid model: the persistent, user-editable part of a visualization session.

A ``Grid`` is an immutable snapshot. It only knows its shape, the fixed start
and end cells and which cells are walls. Search-scoped bookkeeping
(distances, visited flags, predecessors) lives in ``gridpath.search`` and is
rebuilt on every run, so nothing leaks from one run into the next.

Editing returns a new ``Grid``; callers that hand a grid to a search keep an
untouched snapshot no matter what the user does afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from ..errors import InvalidConfigurationError, OutOfBoundsError

Coord = Tuple[int, int]  # (row, col)

DEFAULT_ROWS = 20
DEFAULT_COLS = 30

# Four-directional movement: up, down, left, right. Diagonals are not allowed.
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class Cell:
    """Read-only view of one grid cell."""

    row: int
    col: int
    is_wall: bool = False
    is_start: bool = False
    is_end: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


@dataclass(frozen=True)
class Grid:
    """Rectangular, row-major grid with a fixed start and end cell."""

    rows: int
    cols: int
    start: Coord
    end: Coord
    walls: FrozenSet[Coord] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.rows <= 0:
            raise InvalidConfigurationError(f"rows must be positive, got {self.rows}", field="rows")
        if self.cols <= 0:
            raise InvalidConfigurationError(f"cols must be positive, got {self.cols}", field="cols")
        for name, coord in (("start", self.start), ("end", self.end)):
            if not self.in_bounds(*coord):
                raise InvalidConfigurationError(
                    f"{name} {tuple(coord)} is outside the {self.rows}x{self.cols} grid",
                    field=name,
                )
        # Normalise so equality and hashing are independent of the input types.
        object.__setattr__(self, "start", (int(self.start[0]), int(self.start[1])))
        object.__setattr__(self, "end", (int(self.end[0]), int(self.end[1])))
        object.__setattr__(self, "walls", frozenset(self.walls))

    @classmethod
    def create(
        cls,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        start: Optional[Coord] = None,
        end: Optional[Coord] = None,
    ) -> "Grid":
        """Allocate an empty grid. ``end`` defaults to the bottom-right cell."""

        start = (0, 0) if start is None else start
        end = (rows - 1, cols - 1) if end is None else end
        return cls(rows=rows, cols=cols, start=start, end=end)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row=row, col=col, rows=self.rows, cols=self.cols)

    def cell_id(self, row: int, col: int) -> int:
        """Dense row-major identifier, also the search tie-break order."""
        return row * self.cols + col

    def coord_of(self, cell_id: int) -> Coord:
        return divmod(cell_id, self.cols)

    def neighbors(self, row: int, col: int) -> Iterator[Coord]:
        """Yield in-bounds axis-aligned neighbours, walls included."""
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                yield nr, nc

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def is_wall(self, row: int, col: int) -> bool:
        return (row, col) in self.walls

    def is_protected(self, row: int, col: int) -> bool:
        """Start and end can never become walls."""
        return (row, col) == self.start or (row, col) == self.end

    def cell(self, row: int, col: int) -> Cell:
        self.check_bounds(row, col)
        return Cell(
            row=row,
            col=col,
            is_wall=self.is_wall(row, col),
            is_start=(row, col) == self.start,
            is_end=(row, col) == self.end,
        )

    def cells(self) -> Iterator[Cell]:
        """Iterate every cell in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.cell(row, col)

    # ------------------------------------------------------------------
    # Editing (always returns a new grid)
    # ------------------------------------------------------------------

    def toggle_wall(self, row: int, col: int) -> "Grid":
        """Flip the wall flag of one cell.

        Toggling the start or end cell is a silent no-op and returns ``self``.
        Out-of-bounds coordinates raise ``OutOfBoundsError``.
        """

        self.check_bounds(row, col)
        if self.is_protected(row, col):
            return self
        return replace(self, walls=self.walls ^ {(row, col)})

    def with_walls(self, coords: Iterable[Coord]) -> "Grid":
        """Return a grid with every listed cell turned into a wall.

        Start and end cells in ``coords`` are skipped, matching ``toggle_wall``.
        """

        added: List[Coord] = []
        for row, col in coords:
            self.check_bounds(row, col)
            if not self.is_protected(row, col):
                added.append((row, col))
        return replace(self, walls=self.walls | frozenset(added))

    def cleared(self) -> "Grid":
        """Fresh grid with the same shape, start and end, and no walls."""
        return replace(self, walls=frozenset())


def create_grid(
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    start: Optional[Coord] = None,
    end: Optional[Coord] = None,
) -> Grid:
    """Functional alias for ``Grid.create``."""
    return Grid.create(rows, cols, start, end)


def toggle_wall(grid: Grid, row: int, col: int) -> Grid:
    """Functional alias for ``Grid.toggle_wall``."""
    return grid.toggle_wall(row, col)
