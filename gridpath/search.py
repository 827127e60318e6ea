"""Uniform-cost shortest-path search over a ``Grid``.

Dijkstra's algorithm specialised to unit edge weights. On a grid this finds
the same path lengths as breadth-first search, but the frontier is ordered by
distance so the algorithm carries over unchanged to weighted edges.

Search-scoped state (distance, visited, predecessor) lives in flat arrays
indexed by the row-major cell id, allocated fresh for every run. Predecessors
are stored as ids rather than cell references and are resolved back to
coordinates against the grid snapshot only when the path is rebuilt.

Determinism: frontier ties are broken by the row-major cell id, so identical
grids always produce identical visited traces and paths.
"""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .environment.grid import Coord, Grid

INFINITY = math.inf
NO_PREDECESSOR = -1


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search run.

    ``visited`` is the finalisation order used for replay, ``path`` runs from
    start to end inclusive and is empty when the end cell is unreachable.
    ``distances`` holds the final distance of every visited cell.
    """

    visited: Tuple[Coord, ...] = ()
    path: Tuple[Coord, ...] = ()
    distances: Dict[Coord, int] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def path_length(self) -> Optional[int]:
        """Number of steps along the path, ``None`` when no path exists."""
        if not self.path:
            return None
        return len(self.path) - 1


@dataclass
class SearchStats:
    """Counters from the most recent run, useful for logging and tests."""

    popped: int = 0
    discarded_walls: int = 0
    visited: int = 0
    path_length: Optional[int] = None


class _SearchArena:
    """Per-run bookkeeping, one slot per cell id."""

    def __init__(self, size: int) -> None:
        self.distance: List[float] = [INFINITY] * size
        self.visited: List[bool] = [False] * size
        self.predecessor: List[int] = [NO_PREDECESSOR] * size


class PathSearch:
    """Runs the shortest-path search and reports a replayable trace.

    A single instance may be reused; each ``run`` starts from a fresh arena.
    ``run`` is synchronous and never suspends.
    """

    def __init__(self) -> None:
        self.last_stats = SearchStats()

    def run(self, grid: Grid) -> SearchResult:
        stats = SearchStats()
        self.last_stats = stats

        arena = _SearchArena(grid.size)
        start_id = grid.cell_id(*grid.start)
        end_id = grid.cell_id(*grid.end)
        arena.distance[start_id] = 0

        # Frontier holds (distance, cell_id). Cells still at infinity are left
        # out; an empty heap therefore means the rest of the grid is unreachable.
        frontier: List[Tuple[float, int]] = [(0, start_id)]
        trace: List[Coord] = []
        distances: Dict[Coord, int] = {}

        while frontier:
            dist, cell_id = heapq.heappop(frontier)
            # Lazy deletion: skip stale entries and already finalised cells
            if arena.visited[cell_id] or dist != arena.distance[cell_id]:
                continue
            stats.popped += 1

            row, col = grid.coord_of(cell_id)
            if grid.is_wall(row, col):
                # Walls are finalised without being visited; mark them so
                # stale heap entries for the same cell are ignored too.
                arena.visited[cell_id] = True
                stats.discarded_walls += 1
                continue

            arena.visited[cell_id] = True
            trace.append((row, col))
            distances[(row, col)] = int(dist)

            if cell_id == end_id:
                path = self._reconstruct_path(grid, arena, end_id)
                stats.visited = len(trace)
                stats.path_length = len(path) - 1
                return SearchResult(visited=tuple(trace), path=path, distances=distances)

            self._relax_neighbors(grid, arena, frontier, row, col)

        stats.visited = len(trace)
        return SearchResult(visited=tuple(trace), path=(), distances=distances)

    @staticmethod
    def _relax_neighbors(
        grid: Grid,
        arena: _SearchArena,
        frontier: List[Tuple[float, int]],
        row: int,
        col: int,
    ) -> None:
        cell_id = grid.cell_id(row, col)
        candidate = arena.distance[cell_id] + 1
        for nr, nc in grid.neighbors(row, col):
            nb_id = grid.cell_id(nr, nc)
            if arena.visited[nb_id]:
                continue
            if candidate < arena.distance[nb_id]:
                arena.distance[nb_id] = candidate
                arena.predecessor[nb_id] = cell_id
                heapq.heappush(frontier, (candidate, nb_id))

    @staticmethod
    def _reconstruct_path(grid: Grid, arena: _SearchArena, end_id: int) -> Tuple[Coord, ...]:
        path: List[Coord] = []
        current = end_id
        while current != NO_PREDECESSOR:
            path.append(grid.coord_of(current))
            current = arena.predecessor[current]
        path.reverse()
        return tuple(path)


def run_search(grid: Grid) -> SearchResult:
    """Run a one-off search with a throwaway ``PathSearch``."""
    return PathSearch().run(grid)
