"""Grid environment for gridpath."""

from .grid import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    DIRECTIONS,
    Cell,
    Coord,
    Grid,
    create_grid,
    toggle_wall,
)
from .schemas import GridState
from .helpers import (
    grid_from_state,
    grid_to_state,
    manhattan_distance,
    reachable_cells,
    render_ascii,
)

__all__ = [
    "DEFAULT_COLS",
    "DEFAULT_ROWS",
    "DIRECTIONS",
    "Cell",
    "Coord",
    "Grid",
    "create_grid",
    "toggle_wall",
    "GridState",
    "grid_from_state",
    "grid_to_state",
    "manhattan_distance",
    "reachable_cells",
    "render_ascii",
]
