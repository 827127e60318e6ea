"""Utilities for grids: conversion, reachability and ASCII rendering."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from .grid import Coord, Grid
from .schemas import GridState


def grid_to_state(grid: Grid) -> GridState:
    """Snapshot a grid into its serializable form."""

    return GridState(
        rows=grid.rows,
        cols=grid.cols,
        start=grid.start,
        end=grid.end,
        walls=sorted(grid.walls),
    )


def grid_from_state(state: GridState) -> Grid:
    """Rebuild a grid from a ``GridState``.

    Walls listed on the start or end cell are ignored, the same way a wall
    toggle on those cells is.
    """

    grid = Grid.create(state.rows, state.cols, state.start, state.end)
    return grid.with_walls(state.walls)


def manhattan_distance(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reachable_cells(grid: Grid, origin: Optional[Coord] = None) -> Set[Coord]:
    """Return every non-wall cell connected to ``origin`` (default: start).

    Plain breadth-first flood fill over four-directional moves. A walled
    origin reaches nothing.
    """

    origin = grid.start if origin is None else origin
    grid.check_bounds(*origin)
    if grid.is_wall(*origin):
        return set()

    seen = {origin}
    queue: deque[Coord] = deque([origin])
    while queue:
        row, col = queue.popleft()
        for nb in grid.neighbors(row, col):
            # Walls never join the connected region
            if nb in seen or grid.is_wall(*nb):
                continue
            seen.add(nb)
            queue.append(nb)
    return seen


DEFAULT_SYMBOLS: Dict[str, str] = {
    "start": "S",
    "end": "E",
    "wall": "#",
    "path": "*",
    "visited": ".",
    "empty": " ",
}


def render_ascii(
    grid: Grid,
    visited: Iterable[Coord] = (),
    path: Iterable[Coord] = (),
    *,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render the grid as text, one line per row.

    Precedence follows the on-screen colouring: start, end, wall, path,
    visited, empty. Unknown keys in ``symbols`` are ignored.
    """

    mapping = {**DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    visited_set = set(visited)
    path_set = set(path)

    lines: List[str] = []
    for row in range(grid.rows):
        row_chars: List[str] = []
        for col in range(grid.cols):
            coord = (row, col)
            if coord == grid.start:
                key = "start"
            elif coord == grid.end:
                key = "end"
            elif coord in grid.walls:
                key = "wall"
            elif coord in path_set:
                key = "path"
            elif coord in visited_set:
                key = "visited"
            else:
                key = "empty"
            row_chars.append(mapping[key])
        lines.append("".join(row_chars))

    return "\n".join(lines)
