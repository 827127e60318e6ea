"""
Command-line replay of a single run.

Run: python -m gridpath --rows 10 --cols 15 --wall 3,0 --wall 3,1 --wall 3,2

Settings not given on the command line fall back to GRIDPATH_* environment
variables (a .env file is honoured), then to the built-in defaults.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .config import Config, parse_coord
from .errors import GridPathError
from .logging_utils import log_error, log_info
from .render import TerminalRenderer
from .visualizer import Visualizer


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gridpath",
        description="Find and replay the shortest path across a grid with walls.",
    )
    parser.add_argument("--rows", type=int, help="Number of rows (default 20)")
    parser.add_argument("--cols", type=int, help="Number of columns (default 30)")
    parser.add_argument("--start", help="Start cell as row,col (default 0,0)")
    parser.add_argument("--end", help="End cell as row,col (default bottom-right)")
    parser.add_argument(
        "--wall",
        action="append",
        default=[],
        metavar="ROW,COL",
        help="Toggle a wall on this cell; repeat for more walls",
    )
    parser.add_argument("--visit-interval", type=int, help="Milliseconds between visited cells")
    parser.add_argument("--path-interval", type=int, help="Milliseconds between path cells")
    parser.add_argument(
        "--no-animate",
        action="store_true",
        help="Skip the live replay and print only the final frame",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    # Pacing only matters when frames are drawn live
    live = not args.no_animate and sys.stdout.isatty()
    config = Config.grid_config(
        rows=args.rows,
        cols=args.cols,
        start=parse_coord(args.start, field="--start") if args.start else None,
        end=parse_coord(args.end, field="--end") if args.end else None,
        visit_interval_ms=args.visit_interval if live else 0,
        path_interval_ms=args.path_interval if live else 0,
    )
    log_info(Config.display(config))

    visualizer = Visualizer(config)
    for text in args.wall:
        row, col = parse_coord(text, field="--wall")
        visualizer.toggle_wall(row, col)

    renderer = TerminalRenderer(visualizer.grid, stream=sys.stdout if live else None)
    result = await visualizer.visualize(renderer.on_visit, renderer.on_path, renderer.on_complete)

    if not live:
        print(renderer.frame())
    if result.found:
        print(f"Shortest path: {result.path_length} steps, {len(result.visited)} cells visited")
    else:
        print(f"No path: end cell unreachable, {len(result.visited)} cells visited")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return asyncio.run(run(args))
    except GridPathError as exc:
        log_error(str(exc))
        return 2


if __name__ == "__main__":
    sys.exit(main())
