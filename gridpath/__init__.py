"""
gridpath - shortest-path search and replay on walled grids.

Find the shortest route between two cells with a uniform-cost search, then
replay the visit order and the final path as timed per-cell events.

No file I/O. No global state. Views plug in through callbacks.
"""

__version__ = "0.1.0"

# Grid model
from .environment import (
    Cell,
    Coord,
    Grid,
    GridState,
    create_grid,
    toggle_wall,
    grid_from_state,
    grid_to_state,
    manhattan_distance,
    reachable_cells,
    render_ascii,
)

# Search and replay
from .search import PathSearch, SearchResult, SearchStats, run_search
from .animation import AnimationSequencer, ReplayEvent, timeline

# Session
from .visualizer import Visualizer
from .render import TerminalRenderer
from .schemas import GridConfig
from .config import Config

# Errors
from .errors import (
    GridPathError,
    InvalidConfigurationError,
    OutOfBoundsError,
    ReentrantRunError,
)

__all__ = [
    # Grid model
    "Cell",
    "Coord",
    "Grid",
    "GridState",
    "create_grid",
    "toggle_wall",
    "grid_from_state",
    "grid_to_state",
    "manhattan_distance",
    "reachable_cells",
    "render_ascii",
    # Search and replay
    "PathSearch",
    "SearchResult",
    "SearchStats",
    "run_search",
    "AnimationSequencer",
    "ReplayEvent",
    "timeline",
    # Session
    "Visualizer",
    "TerminalRenderer",
    "GridConfig",
    "Config",
    # Errors
    "GridPathError",
    "InvalidConfigurationError",
    "OutOfBoundsError",
    "ReentrantRunError",
]
