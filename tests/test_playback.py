"""Tests for pathviz.core.playback."""

from __future__ import annotations

import pytest

from pathviz.core.grid import initialize_grid
from pathviz.core.playback import (
    NO_PATH_MSG,
    EventKind,
    Playback,
    PlaybackCallbacks,
    StepDelays,
    replay,
    summary_message,
    timeline,
)
from pathviz.core.traversal import breadth_first_search
from pathviz.core.types import CellType, TraversalResult

FOUND = TraversalResult(
    visited=((0, 1), (1, 0), (0, 2), (1, 1)),
    path=((0, 0), (0, 1), (0, 2)),
    found=True,
)
NOT_FOUND = TraversalResult(visited=((0, 1), (1, 0)), path=(), found=False)


class Recorder:
    def __init__(self) -> None:
        self.calls = []

    def callbacks(self) -> PlaybackCallbacks:
        return PlaybackCallbacks(
            on_visited=lambda c: self.calls.append(("visited", c)),
            on_path=lambda c: self.calls.append(("path", c)),
            on_complete=lambda m: self.calls.append(("complete", m)),
        )


class TestSummary:
    def test_found_reports_edge_count(self) -> None:
        assert summary_message(FOUND) == "Path found! Length: 2 steps"

    def test_not_found(self) -> None:
        assert summary_message(NOT_FOUND) == NO_PATH_MSG


class TestTimeline:
    def test_visited_then_interior_path_then_complete(self) -> None:
        events = list(timeline(FOUND))
        assert [(e.kind, e.cell) for e in events] == [
            (EventKind.VISITED, (0, 1)),
            (EventKind.VISITED, (1, 0)),
            (EventKind.VISITED, (0, 2)),
            (EventKind.VISITED, (1, 1)),
            (EventKind.PATH, (0, 1)),
            (EventKind.COMPLETE, None),
        ]
        assert events[-1].message == "Path found! Length: 2 steps"

    def test_delays_per_kind(self) -> None:
        events = list(timeline(FOUND, StepDelays(visited=7, path=11)))
        assert [e.delay for e in events] == [7, 7, 7, 7, 11, 0]

    def test_not_found_has_no_path_events(self) -> None:
        events = list(timeline(NOT_FOUND))
        assert [e.kind for e in events] == [EventKind.VISITED, EventKind.VISITED, EventKind.COMPLETE]
        assert events[-1].message == NO_PATH_MSG

    def test_timeline_is_single_use(self) -> None:
        events = timeline(NOT_FOUND)
        assert len(list(events)) == 3
        assert list(events) == []


class TestPlaybackClock:
    def test_events_come_due_on_schedule(self) -> None:
        pb = Playback(FOUND, StepDelays(visited=20, path=50))
        assert pb.advance(0) == []
        assert pb.advance(19) == []
        assert [e.cell for e in pb.advance(20)] == [(0, 1)]
        assert [e.cell for e in pb.advance(60)] == [(1, 0), (0, 2)]
        assert not pb.finished

    def test_catches_up_after_a_long_frame(self) -> None:
        pb = Playback(FOUND, StepDelays(visited=20, path=50))
        pb.start(100)
        events = pb.advance(10_000)
        assert [e.kind for e in events][-1] is EventKind.COMPLETE
        assert len(events) == 6
        assert pb.finished
        assert pb.advance(20_000) == []

    def test_path_waits_for_its_own_delay(self) -> None:
        pb = Playback(FOUND, StepDelays(visited=20, path=50))
        pb.start(0)
        assert len(pb.advance(80)) == 4
        assert pb.advance(129) == []
        assert [e.kind for e in pb.advance(130)] == [EventKind.PATH, EventKind.COMPLETE]

    def test_pump_dispatches_in_order(self) -> None:
        rec = Recorder()
        pb = Playback(NOT_FOUND, StepDelays(visited=5, path=5))
        pb.start(0)
        assert pb.pump(100, rec.callbacks()) == 3
        assert rec.calls == [
            ("visited", (0, 1)),
            ("visited", (1, 0)),
            ("complete", NO_PATH_MSG),
        ]
        assert pb.emitted == 3


class TestLiveGuard:
    def test_skips_cells_that_are_not_empty(self) -> None:
        live = {(1, 0): CellType.END, (1, 1): CellType.WALL}
        pb = Playback(FOUND, live_type=lambda c: live.get(c, CellType.EMPTY))
        pb.start(0)
        events = pb.advance(10_000)
        assert [e.cell for e in events if e.kind is EventKind.VISITED] == [(0, 1), (0, 2)]
        assert pb.skipped == 2
        assert pb.finished

    def test_skipped_step_adds_no_delay(self) -> None:
        live = {(1, 0): CellType.WALL}
        pb = Playback(FOUND, StepDelays(visited=20, path=50),
                      live_type=lambda c: live.get(c, CellType.EMPTY))
        pb.start(0)
        assert [e.cell for e in pb.advance(20)] == [(0, 1)]
        assert [e.cell for e in pb.advance(40)] == [(0, 2)]
        assert [e.cell for e in pb.advance(60)] == [(1, 1)]

    def test_checked_when_step_comes_due(self) -> None:
        live = {}
        pb = Playback(FOUND, StepDelays(visited=20, path=50),
                      live_type=lambda c: live.get(c, CellType.EMPTY))
        pb.start(0)
        assert [e.cell for e in pb.advance(20)] == [(0, 1)]
        # (1, 0) is already queued but not yet due
        live[(1, 0)] = CellType.WALL
        assert [e.cell for e in pb.advance(40)] == [(0, 2)]
        assert pb.skipped == 1

    def test_without_live_type_nothing_is_skipped(self) -> None:
        pb = Playback(FOUND)
        pb.start(0)
        assert len(pb.advance(10_000)) == 6
        assert pb.skipped == 0


class TestReplay:
    def test_sleeps_then_dispatches(self) -> None:
        rec = Recorder()
        sleeps = []
        replay(FOUND, rec.callbacks(), StepDelays(visited=20, path=50),
               live_type=lambda c: CellType.EMPTY, sleep=sleeps.append)
        assert sleeps == [0.02, 0.02, 0.02, 0.02, 0.05]
        assert rec.calls[-1] == ("complete", "Path found! Length: 2 steps")
        assert [c for k, c in rec.calls if k == "path"] == [(0, 1)]

    def test_skipped_steps_do_not_sleep(self) -> None:
        sleeps = []
        replay(NOT_FOUND, Recorder().callbacks(), sleep=sleeps.append,
               live_type=lambda c: CellType.WALL)
        assert sleeps == []

    def test_complete_fires_once(self) -> None:
        rec = Recorder()
        replay(NOT_FOUND, rec.callbacks(), live_type=lambda c: CellType.EMPTY,
               sleep=lambda _t: None)
        assert [k for k, _ in rec.calls].count("complete") == 1

    def test_live_type_is_required(self) -> None:
        with pytest.raises(TypeError):
            replay(NOT_FOUND, Recorder().callbacks(), sleep=lambda _t: None)

    def test_endpoints_never_reported(self) -> None:
        grid = initialize_grid(5, 5).with_cell((0, 0), CellType.START).with_cell((0, 4), CellType.END)
        result = breadth_first_search(grid, (0, 0), (0, 4))
        assert (0, 4) in result.visited
        rec = Recorder()
        replay(result, rec.callbacks(), live_type=grid.cell_type, sleep=lambda _t: None)
        painted = {c for k, c in rec.calls if k != "complete"}
        assert (0, 0) not in painted
        assert (0, 4) not in painted

    def test_playback_cannot_restart(self) -> None:
        pb = Playback(NOT_FOUND)
        pb.run(Recorder().callbacks(), sleep=lambda _t: None)
        assert pb.finished
        with pytest.raises(RuntimeError):
            pb.run(Recorder().callbacks(), sleep=lambda _t: None)
