"""Timed replay of a search result.

The replay is a finite sequence of ``ReplayEvent`` records produced lazily by
``timeline``: one ``visit`` event per visited cell, then one ``path`` event
per path cell, then a single ``complete`` event. Offsets are in milliseconds
from the start of the replay:

    visit i   at  i * visit_interval
    path j    at  last_visit + j * path_interval
    complete  at  the last path event (or the last visit if there is no path)

``AnimationSequencer.play`` walks that timeline on the running asyncio loop and
dispatches each event to the caller's callbacks. It suspends only between
events and measures every offset from the replay start, so slow callbacks do
not push later events further out. Scheduling is cooperative and
best-effort; ordering is exact.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence

from .environment.grid import Coord
from .errors import InvalidConfigurationError

DEFAULT_VISIT_INTERVAL_MS = 10
DEFAULT_PATH_INTERVAL_MS = 50

EVENT_VISIT = "visit"
EVENT_PATH = "path"
EVENT_COMPLETE = "complete"

CellCallback = Callable[[Coord], None]
CompleteCallback = Callable[[], None]


@dataclass(frozen=True)
class ReplayEvent:
    """One step of a replay. ``cell`` is ``None`` for the completion event."""

    kind: str
    cell: Optional[Coord]
    at_ms: int


def timeline(
    visited: Sequence[Coord],
    path: Sequence[Coord],
    *,
    visit_interval_ms: int = DEFAULT_VISIT_INTERVAL_MS,
    path_interval_ms: int = DEFAULT_PATH_INTERVAL_MS,
) -> Iterator[ReplayEvent]:
    """Yield the replay events in dispatch order.

    The generator holds no state beyond its arguments, so calling it again
    restarts the sequence from the beginning.
    """

    at = 0
    for index, cell in enumerate(visited):
        at = index * visit_interval_ms
        yield ReplayEvent(EVENT_VISIT, cell, at)

    # Path phase begins on the tick of the last visit, not one interval later.
    path_start = at
    for index, cell in enumerate(path):
        at = path_start + index * path_interval_ms
        yield ReplayEvent(EVENT_PATH, cell, at)

    yield ReplayEvent(EVENT_COMPLETE, None, at)


class AnimationSequencer:
    """Replays visited cells and the shortest path through callbacks.

    Only one replay per sequencer is meant to run at a time; rejecting a
    second concurrent ``play`` is left to the controller. ``cancel`` stops an
    in-flight replay at its next suspension point.
    """

    def __init__(
        self,
        visit_interval_ms: int = DEFAULT_VISIT_INTERVAL_MS,
        path_interval_ms: int = DEFAULT_PATH_INTERVAL_MS,
    ) -> None:
        if visit_interval_ms < 0:
            raise InvalidConfigurationError(
                f"must be >= 0, got {visit_interval_ms}", field="visit_interval_ms"
            )
        if path_interval_ms < 0:
            raise InvalidConfigurationError(
                f"must be >= 0, got {path_interval_ms}", field="path_interval_ms"
            )
        self.visit_interval_ms = visit_interval_ms
        self.path_interval_ms = path_interval_ms
        self._cancel_requested: Optional[asyncio.Event] = None

    @property
    def is_playing(self) -> bool:
        return self._cancel_requested is not None

    def events(self, visited: Sequence[Coord], path: Sequence[Coord]) -> Iterator[ReplayEvent]:
        """Timeline for this sequencer's intervals."""
        return timeline(
            visited,
            path,
            visit_interval_ms=self.visit_interval_ms,
            path_interval_ms=self.path_interval_ms,
        )

    def cancel(self) -> bool:
        """Request that the active replay stop. Returns False if none is active."""
        if self._cancel_requested is None:
            return False
        self._cancel_requested.set()
        return True

    async def play(
        self,
        visited: Sequence[Coord],
        path: Sequence[Coord],
        on_visit: CellCallback,
        on_path: CellCallback,
        on_complete: CompleteCallback,
    ) -> bool:
        """Dispatch every replay event at its scheduled offset.

        Returns True once ``on_complete`` has fired, False if the replay was
        cancelled first (``on_complete`` is not called in that case).
        """

        loop = asyncio.get_running_loop()
        cancel_requested = asyncio.Event()
        self._cancel_requested = cancel_requested
        started = loop.time()

        try:
            for event in self.events(visited, path):
                delay = started + event.at_ms / 1000.0 - loop.time()
                if not await self._wait(cancel_requested, delay):
                    return False

                if event.kind == EVENT_VISIT:
                    on_visit(event.cell)
                elif event.kind == EVENT_PATH:
                    on_path(event.cell)
                else:
                    on_complete()
            return True
        finally:
            self._cancel_requested = None

    @staticmethod
    async def _wait(cancel_requested: asyncio.Event, delay: float) -> bool:
        """Suspend for ``delay`` seconds; False if a cancel arrived meanwhile."""

        if cancel_requested.is_set():
            return False
        if delay <= 0:
            # Still yield so other tasks (and cancel requests) get a turn.
            await asyncio.sleep(0)
            return not cancel_requested.is_set()
        try:
            await asyncio.wait_for(cancel_requested.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return True
        return False
