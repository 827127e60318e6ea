"""Tests for the uniform-cost shortest-path search."""

import math
import random

import pytest

from gridpath.environment import Grid, create_grid, manhattan_distance, reachable_cells
from gridpath.search import PathSearch, SearchResult, run_search


def random_grid(seed: int, rows: int = 8, cols: int = 11, density: float = 0.3) -> Grid:
    rng = random.Random(seed)
    start = (rng.randrange(rows), rng.randrange(cols))
    end = (rng.randrange(rows), rng.randrange(cols))
    grid = create_grid(rows, cols, start, end)
    walls = [
        (r, c)
        for r in range(rows)
        for c in range(cols)
        if rng.random() < density
    ]
    return grid.with_walls(walls)


def linear_scan_search(grid: Grid):
    """Unoptimised reference: rescan the whole frontier for the minimum each step."""

    distance = {cell.coord: math.inf for cell in grid.cells()}
    predecessor = {}
    distance[grid.start] = 0
    frontier = [cell.coord for cell in grid.cells()]
    visited = []

    while frontier:
        closest = min(frontier, key=lambda c: (distance[c], grid.cell_id(*c)))
        frontier.remove(closest)
        if grid.is_wall(*closest):
            continue
        if distance[closest] == math.inf:
            return visited, []
        visited.append(closest)
        if closest == grid.end:
            path = [closest]
            while path[-1] in predecessor:
                path.append(predecessor[path[-1]])
            return visited, path[::-1]
        for nb in grid.neighbors(*closest):
            if nb in frontier and distance[closest] + 1 < distance[nb]:
                distance[nb] = distance[closest] + 1
                predecessor[nb] = closest
    return visited, []


def assert_valid_path(grid: Grid, path):
    assert path[0] == grid.start
    assert path[-1] == grid.end
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1
    assert not any(grid.is_wall(*cell) for cell in path)
    assert len(set(path)) == len(path)


def test_open_3x3_grid_scenario():
    grid = create_grid(3, 3, (0, 0), (2, 2))
    result = run_search(grid)

    assert len(result.path) == 5
    assert result.path_length == 4
    assert_valid_path(grid, result.path)
    assert len(result.visited) == 9
    # Row-major tie-breaking fixes the exact order
    assert result.visited == (
        (0, 0), (0, 1), (1, 0), (0, 2), (1, 1), (2, 0), (1, 2), (2, 1), (2, 2),
    )
    assert result.path == ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2))


def test_walled_row_blocks_end():
    grid = create_grid(3, 3, (0, 0), (2, 2)).with_walls([(1, 0), (1, 1), (1, 2)])
    result = run_search(grid)

    assert result.path == ()
    assert not result.found
    assert result.path_length is None
    assert not any(row == 1 for row, _ in result.visited)
    # Everything still connected to the start is visited
    assert set(result.visited) == {(0, 0), (0, 1), (0, 2)}


def test_start_equals_end():
    grid = create_grid(3, 3, (1, 1), (1, 1))
    result = run_search(grid)
    assert result.visited == ((1, 1),)
    assert result.path == ((1, 1),)
    assert result.path_length == 0


def test_single_cell_grid():
    result = run_search(create_grid(1, 1))
    assert result.visited == ((0, 0),)
    assert result.path == ((0, 0),)


def test_walled_start_or_end_yields_empty_path():
    # Cannot happen through toggle_wall; build the grid directly.
    walled_start = Grid(rows=3, cols=3, start=(0, 0), end=(2, 2), walls=frozenset({(0, 0)}))
    result = run_search(walled_start)
    assert result.path == ()
    assert result.visited == ()

    walled_end = Grid(rows=3, cols=3, start=(0, 0), end=(2, 2), walls=frozenset({(2, 2)}))
    result = run_search(walled_end)
    assert result.path == ()
    assert (2, 2) not in result.visited
    assert len(result.visited) == 8


@pytest.mark.parametrize("rows, cols, start, end", [
    (5, 7, (0, 0), (4, 6)),
    (6, 6, (5, 0), (0, 5)),
    (4, 9, (2, 4), (0, 0)),
    (1, 12, (0, 11), (0, 0)),
])
def test_open_grid_path_matches_manhattan_distance(rows, cols, start, end):
    grid = create_grid(rows, cols, start, end)
    result = run_search(grid)
    assert result.path_length == manhattan_distance(start, end)
    assert_valid_path(grid, result.path)


@pytest.mark.parametrize("seed", range(25))
def test_trace_distances_are_monotonic(seed):
    grid = random_grid(seed)
    result = run_search(grid)
    distances = [result.distances[cell] for cell in result.visited]
    assert distances == sorted(distances)
    if result.found:
        assert_valid_path(grid, result.path)
        assert result.distances[grid.end] == result.path_length


@pytest.mark.parametrize("seed", range(10))
def test_identical_grids_give_identical_results(seed):
    first = run_search(random_grid(seed))
    second = run_search(random_grid(seed))
    assert first.visited == second.visited
    assert first.path == second.path


@pytest.mark.parametrize("seed", range(25))
def test_heap_frontier_matches_linear_scan(seed):
    grid = random_grid(seed, rows=6, cols=7, density=0.25)
    result = run_search(grid)
    visited, path = linear_scan_search(grid)
    assert list(result.visited) == visited
    assert list(result.path) == path


def test_unreachable_end_visits_every_reachable_cell_once():
    # End sealed off in the bottom-right corner
    grid = create_grid(5, 5, (0, 0), (4, 4)).with_walls([(3, 4), (4, 3), (3, 3)])
    result = run_search(grid)
    assert result.path == ()
    assert len(result.visited) == len(set(result.visited))
    assert set(result.visited) == reachable_cells(grid)


@pytest.mark.parametrize("seed", range(25))
def test_unreachable_random_grids(seed):
    grid = random_grid(seed, density=0.45)
    result = run_search(grid)
    if grid.end not in reachable_cells(grid):
        assert result.path == ()
        assert set(result.visited) == reachable_cells(grid)
        assert len(result.visited) == len(set(result.visited))


def test_search_instance_is_reusable_without_leakage():
    search = PathSearch()
    walled = create_grid(3, 3).with_walls([(1, 0), (1, 1), (1, 2)])
    assert search.run(walled).path == ()
    assert search.last_stats.discarded_walls == 3

    open_result = search.run(walled.cleared())
    assert open_result.path_length == 4
    assert len(open_result.visited) == 9
    assert search.last_stats.visited == 9
    assert search.last_stats.path_length == 4
    assert search.last_stats.discarded_walls == 0


def test_search_does_not_touch_grid():
    grid = create_grid(4, 4).with_walls([(1, 1)])
    before = (grid.rows, grid.cols, grid.start, grid.end, grid.walls)
    run_search(grid)
    assert (grid.rows, grid.cols, grid.start, grid.end, grid.walls) == before


def test_search_result_is_frozen():
    result = run_search(create_grid(2, 2))
    assert isinstance(result, SearchResult)
    with pytest.raises(AttributeError):
        result.path = ()
