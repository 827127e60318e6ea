"""Terminal view for replays.

``TerminalRenderer`` is the display model a replay drives: its ``on_visit``,
``on_path`` and ``on_complete`` methods plug straight into
``AnimationSequencer.play``. Each event updates the per-cell state; when a
stream is attached the frame is redrawn in place.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, TextIO

from .environment.grid import Coord, Grid
from .environment.helpers import render_ascii

# Cursor home + clear screen
_CLEAR = "\033[H\033[J"


class TerminalRenderer:
    """Collects per-cell replay events and renders ASCII frames."""

    def __init__(
        self,
        grid: Grid,
        *,
        stream: Optional[TextIO] = None,
        symbols: Optional[Dict[str, str]] = None,
    ) -> None:
        self.grid = grid
        self.stream = stream
        self.symbols = symbols
        self.visited: List[Coord] = []
        self.path: List[Coord] = []
        self._visited_set: Set[Coord] = set()
        self._path_set: Set[Coord] = set()
        self.completed = False

    def reset(self, grid: Optional[Grid] = None) -> None:
        """Forget replay state, optionally switching to a new grid."""
        if grid is not None:
            self.grid = grid
        self.visited.clear()
        self.path.clear()
        self._visited_set.clear()
        self._path_set.clear()
        self.completed = False

    def on_visit(self, cell: Coord) -> None:
        if cell not in self._visited_set:
            self._visited_set.add(cell)
            self.visited.append(cell)
        self._redraw()

    def on_path(self, cell: Coord) -> None:
        if cell not in self._path_set:
            self._path_set.add(cell)
            self.path.append(cell)
        self._redraw()

    def on_complete(self) -> None:
        self.completed = True
        self._redraw()

    def frame(self) -> str:
        return render_ascii(self.grid, self._visited_set, self._path_set, symbols=self.symbols)

    def _redraw(self) -> None:
        if self.stream is None:
            return
        self.stream.write(_CLEAR + self.frame() + "\n")
        self.stream.flush()
