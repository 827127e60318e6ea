"""
Example: Corridor Maze - Live Replay in the Terminal
====================================================

WHAT THIS SHOWS:
- Building a session from environment-backed configuration
- Editing walls between runs (start/end toggles are ignored)
- Replaying the visit order and the shortest path through a view
- Cancelling a replay part-way, then running again to completion

RUN:
    python -m examples.corridor.run
"""

import asyncio
import sys

from gridpath import Config, TerminalRenderer, Visualizer


def build_corridors(visualizer: Visualizer) -> None:
    """Alternate walls with a gap at opposite ends, forcing a zig-zag path."""
    grid = visualizer.grid
    for row in range(2, grid.rows - 1, 3):
        gap = grid.cols - 1 if (row // 3) % 2 == 0 else 0
        for col in range(grid.cols):
            if col != gap:
                visualizer.toggle_wall(row, col)


async def main():
    config = Config.grid_config(rows=12, cols=24, visit_interval_ms=5, path_interval_ms=25)
    print(Config.display(config))

    visualizer = Visualizer(config)
    build_corridors(visualizer)
    print(visualizer.describe())

    renderer = TerminalRenderer(visualizer.grid, stream=sys.stdout)

    # First run: cancel after a moment to show an aborted replay
    task = asyncio.create_task(
        visualizer.visualize(renderer.on_visit, renderer.on_path, renderer.on_complete)
    )
    await asyncio.sleep(0.3)
    visualizer.cancel()
    await task

    # Second run: let it finish
    renderer.reset(visualizer.grid)
    result = await visualizer.visualize(renderer.on_visit, renderer.on_path, renderer.on_complete)
    print(f"\nPath length: {result.path_length}, cells visited: {len(result.visited)}")


if __name__ == "__main__":
    asyncio.run(main())
