"""Tests for the session controller: run lifecycle, re-entrancy and logging."""

from __future__ import annotations

import asyncio
import contextlib
import io

import pytest

from gridpath.animation import AnimationSequencer
from gridpath.environment import create_grid
from gridpath.errors import InvalidConfigurationError, OutOfBoundsError, ReentrantRunError
from gridpath.logging_utils import Color, colored
from gridpath.render import TerminalRenderer
from gridpath.schemas import GridConfig
from gridpath.visualizer import Visualizer


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.setenv("GRIDPATH_NO_COLOR", "1")
    monkeypatch.delenv("GRIDPATH_VERBOSE", raising=False)


def fast_config(**overrides) -> GridConfig:
    values = {"rows": 3, "cols": 3, "visit_interval_ms": 0, "path_interval_ms": 0}
    values.update(overrides)
    return GridConfig(**values)


@pytest.mark.asyncio
async def test_visualize_replays_search_result_to_view():
    visualizer = Visualizer(fast_config())
    renderer = TerminalRenderer(visualizer.grid)

    result = await visualizer.visualize(renderer.on_visit, renderer.on_path, renderer.on_complete)

    assert result.path_length == 4
    assert renderer.visited == list(result.visited)
    assert renderer.path == list(result.path)
    assert renderer.completed
    assert not visualizer.is_running
    assert visualizer.last_result is result


@pytest.mark.asyncio
async def test_visualize_without_callbacks():
    visualizer = Visualizer(fast_config())
    result = await visualizer.visualize()
    assert result.found


@pytest.mark.asyncio
async def test_running_session_rejects_reentry_edits_and_reset():
    visualizer = Visualizer(fast_config(visit_interval_ms=30, path_interval_ms=30))

    task = asyncio.create_task(visualizer.visualize())
    await asyncio.sleep(0)
    assert visualizer.is_running

    with pytest.raises(ReentrantRunError):
        await visualizer.visualize()
    with pytest.raises(ReentrantRunError):
        visualizer.toggle_wall(1, 1)
    with pytest.raises(ReentrantRunError):
        visualizer.reset()

    assert visualizer.cancel() is True
    await task
    assert not visualizer.is_running

    # Editing works again once the run is over
    assert visualizer.toggle_wall(1, 1).walls == {(1, 1)}


@pytest.mark.asyncio
async def test_editing_resumes_from_on_complete():
    visualizer = Visualizer(fast_config())
    edits = []

    def on_complete():
        edits.append(visualizer.toggle_wall(0, 1))

    await visualizer.visualize(on_complete=on_complete)
    assert edits and edits[0].walls == {(0, 1)}


@pytest.mark.asyncio
async def test_cancelled_run_skips_completion_and_unlocks():
    visualizer = Visualizer(fast_config(rows=5, cols=5, visit_interval_ms=50))
    completions = []

    task = asyncio.create_task(visualizer.visualize(on_complete=lambda: completions.append(True)))
    await asyncio.sleep(0.06)
    visualizer.cancel()
    result = await task

    assert completions == []
    assert result.found
    assert not visualizer.is_running


def test_toggle_and_reset_between_runs():
    visualizer = Visualizer(fast_config())
    visualizer.toggle_wall(1, 0)
    visualizer.toggle_wall(1, 1)
    assert visualizer.grid.walls == {(1, 0), (1, 1)}
    # Start and end are protected
    visualizer.toggle_wall(0, 0)
    assert visualizer.grid.walls == {(1, 0), (1, 1)}

    with pytest.raises(OutOfBoundsError):
        visualizer.toggle_wall(5, 5)

    fresh = visualizer.reset()
    assert fresh.walls == frozenset()
    assert visualizer.last_result is None
    assert visualizer.describe() == "Grid 3x3, start=(0, 0), end=(2, 2), walls=0"


@pytest.mark.asyncio
async def test_search_sees_snapshot_taken_at_run_start():
    visualizer = Visualizer(fast_config(visit_interval_ms=20, path_interval_ms=20))
    task = asyncio.create_task(visualizer.visualize())
    await asyncio.sleep(0)
    snapshot = visualizer.grid
    visualizer.cancel()
    result = await task
    assert result.visited[0] == snapshot.start
    assert visualizer.grid is snapshot


def test_sequencer_defaults_follow_config():
    visualizer = Visualizer(GridConfig(visit_interval_ms=7, path_interval_ms=70))
    assert visualizer.sequencer.visit_interval_ms == 7
    assert visualizer.sequencer.path_interval_ms == 70

    custom = AnimationSequencer(1, 2)
    assert Visualizer(sequencer=custom).sequencer is custom


@pytest.mark.asyncio
async def test_logging_tags_for_found_path():
    visualizer = Visualizer(fast_config())

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        await visualizer.visualize()
    out = buf.getvalue()

    assert "[•] [Search] Running shortest-path search on 3x3 grid (0 walls)..." in out
    assert "[✓] [Search] Visited 9 cells, path length 4" in out
    assert "[✓] [Replay] Complete" in out
    assert "[>] [Replay]" not in out


@pytest.mark.asyncio
async def test_logging_tags_for_unreachable_end():
    visualizer = Visualizer(fast_config())
    for col in range(3):
        visualizer.toggle_wall(1, col)

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        result = await visualizer.visualize()
    out = buf.getvalue()

    assert result.path == ()
    assert "[i] [Search] Visited 3 cells, no path to end" in out


@pytest.mark.asyncio
async def test_verbose_logs_each_replay_event(monkeypatch):
    monkeypatch.setenv("GRIDPATH_VERBOSE", "true")
    visualizer = Visualizer(fast_config(rows=1, cols=2))

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        await visualizer.visualize()
    out = buf.getvalue()

    assert "[>] [Replay] visit (0, 0)" in out
    assert "[>] [Replay] visit (0, 1)" in out
    assert "[>] [Replay] path (0, 1)" in out


@pytest.mark.asyncio
async def test_rejection_is_logged():
    visualizer = Visualizer(fast_config(visit_interval_ms=30))
    task = asyncio.create_task(visualizer.visualize())
    await asyncio.sleep(0)

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        with pytest.raises(ReentrantRunError):
            visualizer.toggle_wall(1, 1)
    assert "[!] [Session] Rejected: cannot edit walls during a run" in buf.getvalue()

    visualizer.cancel()
    await task


def test_injected_grid_must_match_config():
    with pytest.raises(InvalidConfigurationError) as excinfo:
        Visualizer(fast_config(), grid=create_grid(5, 5))
    assert excinfo.value.field == "grid"

    with pytest.raises(InvalidConfigurationError):
        Visualizer(fast_config(), grid=create_grid(3, 3, end=(0, 2)))


def test_injected_grid_without_config_supplies_settings():
    grid = create_grid(4, 6, (1, 1), (3, 0)).with_walls([(2, 2)])
    visualizer = Visualizer(grid=grid)
    assert visualizer.grid is grid
    assert (visualizer.config.rows, visualizer.config.cols) == (4, 6)
    assert visualizer.config.start == (1, 1)
    assert visualizer.config.end == (3, 0)

    matching = Visualizer(fast_config(), grid=create_grid(3, 3).with_walls([(1, 1)]))
    assert matching.grid.walls == {(1, 1)}


def test_colored_respects_no_color(monkeypatch):
    assert colored("plain", Color.GREEN) == "plain"
    monkeypatch.delenv("GRIDPATH_NO_COLOR")
    assert colored("tinted", Color.GREEN) == "\033[92mtinted\033[0m"
