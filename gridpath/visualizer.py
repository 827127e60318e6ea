"""
Session controller.

Owns everything the search core deliberately does not:
1. The current grid and wall editing between runs
2. Running/idle state, rejecting re-entrant runs, resets and edits
3. Invoking the search once per run and handing its result to the sequencer
4. Console logging of each run

Views plug in through plain callbacks, the same ones
``AnimationSequencer.play`` takes.
"""

from typing import Callable, Optional

from .animation import AnimationSequencer, CellCallback, CompleteCallback
from .environment.grid import Coord, Grid
from .environment.helpers import grid_to_state
from .errors import InvalidConfigurationError, ReentrantRunError
from .logging_utils import (
    colored,
    Color,
    is_verbose,
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
    LOG_TAG_REPLAY,
    LOG_TAG_SUCCESS,
)
from .schemas import GridConfig
from .search import PathSearch, SearchResult


def _noop_cell(cell: Coord) -> None:
    return None


def _noop() -> None:
    return None


class Visualizer:
    """
    Single-writer controller for one visualization session.

    A run locks the session from the moment the search starts until the
    replay completes or is cancelled. While locked, ``visualize``,
    ``toggle_wall`` and ``reset`` raise ``ReentrantRunError``.
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        *,
        grid: Optional[Grid] = None,
        search: Optional[PathSearch] = None,
        sequencer: Optional[AnimationSequencer] = None,
    ):
        """Initialize the session.

        Args:
            config: Grid shape, endpoints and replay intervals (defaults apply
                when omitted)
            grid: Optional starting grid; built from ``config`` when omitted.
                Its shape and endpoints must agree with ``config``; with no
                ``config`` the settings are taken from the grid.
            search: Optional PathSearch instance (fresh one by default)
            sequencer: Optional AnimationSequencer; defaults use the
                intervals from ``config``
        """
        if config is None and grid is not None:
            config = GridConfig(rows=grid.rows, cols=grid.cols, start=grid.start, end=grid.end)
        self.config = config or GridConfig()
        if grid is None:
            grid = Grid.create(
                self.config.rows, self.config.cols, self.config.start, self.config.end
            )
        elif (grid.rows, grid.cols, grid.start, grid.end) != (
            self.config.rows, self.config.cols, self.config.start, self.config.end
        ):
            raise InvalidConfigurationError(
                f"grid is {grid.rows}x{grid.cols} from {grid.start} to {grid.end}, "
                f"config says {self.config.rows}x{self.config.cols} "
                f"from {self.config.start} to {self.config.end}",
                field="grid",
            )
        self._grid = grid
        self.search = search or PathSearch()
        self.sequencer = sequencer or AnimationSequencer(
            visit_interval_ms=self.config.visit_interval_ms,
            path_interval_ms=self.config.path_interval_ms,
        )
        self._running = False
        self.last_result: Optional[SearchResult] = None

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def is_running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def toggle_wall(self, row: int, col: int) -> Grid:
        """Flip a wall between runs. Start/end toggles are silently ignored."""
        self._ensure_idle("edit walls")
        self._grid = self._grid.toggle_wall(row, col)
        return self._grid

    def reset(self) -> Grid:
        """Replace the grid with a fresh one: same shape and endpoints, no walls."""
        self._ensure_idle("reset the grid")
        self._grid = self._grid.cleared()
        self.last_result = None
        return self._grid

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    async def visualize(
        self,
        on_visit: Optional[CellCallback] = None,
        on_path: Optional[CellCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
    ) -> SearchResult:
        """Search the current grid and replay the result through the callbacks.

        Returns the search result once the replay finishes or is cancelled.

        Raises:
            ReentrantRunError: if a run is already in flight
        """
        self._ensure_idle("start a run")
        self._running = True

        visit_cb = on_visit or _noop_cell
        path_cb = on_path or _noop_cell
        complete_cb = on_complete or _noop

        try:
            grid = self._grid
            print(colored(
                f"  {LOG_TAG_DETERMINISTIC} [Search] Running shortest-path search on "
                f"{grid.rows}x{grid.cols} grid ({len(grid.walls)} walls)...",
                Color.BLUE,
            ))
            result = self.search.run(grid)
            self.last_result = result
            self._print_search_summary(result)

            completed = await self.sequencer.play(
                result.visited,
                result.path,
                self._wrap_cell("visit", visit_cb),
                self._wrap_cell("path", path_cb),
                self._wrap_complete(complete_cb),
            )
            if not completed:
                print(colored(f"  {LOG_TAG_ERROR} [Replay] Cancelled before completion", Color.RED))
            return result
        finally:
            self._running = False

    def cancel(self) -> bool:
        """Abort the in-flight replay, if any. The search itself is never interrupted."""
        return self.sequencer.cancel()

    def describe(self) -> str:
        """Human-readable summary of the current grid snapshot."""
        state = grid_to_state(self._grid)
        return (
            f"Grid {state.rows}x{state.cols}, start={state.start}, "
            f"end={state.end}, walls={len(state.walls)}"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_idle(self, action: str) -> None:
        if self._running:
            print(colored(f"  {LOG_TAG_ERROR} [Session] Rejected: cannot {action} during a run", Color.RED))
            raise ReentrantRunError(action)

    def _print_search_summary(self, result: SearchResult) -> None:
        if result.found:
            print(colored(
                f"  {LOG_TAG_SUCCESS} [Search] Visited {len(result.visited)} cells, "
                f"path length {result.path_length}",
                Color.GREEN,
            ))
        else:
            print(colored(
                f"  {LOG_TAG_INFO} [Search] Visited {len(result.visited)} cells, no path to end",
                Color.CYAN,
            ))

    def _wrap_cell(self, kind: str, callback: CellCallback) -> CellCallback:
        if not is_verbose():
            return callback

        def _logged(cell: Coord) -> None:
            print(colored(f"    {LOG_TAG_REPLAY} [Replay] {kind} {cell}", Color.YELLOW))
            callback(cell)

        return _logged

    def _wrap_complete(self, callback: CompleteCallback) -> Callable[[], None]:
        def _completed() -> None:
            # Unlock first so the view may edit walls from its on_complete
            self._running = False
            print(colored(f"  {LOG_TAG_SUCCESS} [Replay] Complete", Color.GREEN))
            callback()

        return _completed
