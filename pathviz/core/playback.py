# pathviz/core/playback.py
#!/usr/bin/env python3
"""
Playback: turns a TraversalResult into a timed sequence of cell transitions.

The sequence is a lazy generator (``timeline``) of PlaybackEvents:
- one VISITED event per discovered cell, ``delays.visited`` ms apart
- if a path was found, one PATH event per interior path cell (start and end
  are never repainted), ``delays.path`` ms apart
- a final COMPLETE event carrying the summary message

The timeline itself is unfiltered. The drivers check each visited step
against the live grid when it comes due and drop it (no event, no delay)
if its cell is no longer empty. The end cell is always dropped this way.

Two drivers consume the same timeline:
- ``Playback.pump(now, callbacks)`` for a frame loop with a millisecond clock
- ``replay(...)`` which blocks and sleeps between steps
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional
import logging
import time

from pathviz.core.types import Cell, CellType, TraversalResult

logger = logging.getLogger(__name__)

DEFAULT_VISITED_DELAY_MS = 20
DEFAULT_PATH_DELAY_MS = 50

PATH_FOUND_MSG = "Path found! Length: {} steps"
NO_PATH_MSG = "No path found! The end point is unreachable."

LiveType = Callable[[Cell], CellType]


class EventKind(str, Enum):
    VISITED = "visited"
    PATH = "path"
    COMPLETE = "complete"


@dataclass(frozen=True)
class PlaybackEvent:
    kind: EventKind
    delay: int                    # ms to wait before this event fires
    cell: Optional[Cell] = None
    message: str = ""


@dataclass(frozen=True)
class StepDelays:
    visited: int = DEFAULT_VISITED_DELAY_MS
    path: int = DEFAULT_PATH_DELAY_MS


@dataclass(frozen=True)
class PlaybackCallbacks:
    on_visited: Callable[[Cell], None]
    on_path: Callable[[Cell], None]
    on_complete: Callable[[str], None]


def summary_message(result: TraversalResult) -> str:
    if result.found:
        return PATH_FOUND_MSG.format(result.edge_count)
    return NO_PATH_MSG


def timeline(result: TraversalResult, delays: StepDelays = StepDelays()) -> Iterator[PlaybackEvent]:
    for cell in result.visited:
        yield PlaybackEvent(EventKind.VISITED, delays.visited, cell)
    if result.found:
        for cell in result.path[1:-1]:
            yield PlaybackEvent(EventKind.PATH, delays.path, cell)
    yield PlaybackEvent(EventKind.COMPLETE, 0, message=summary_message(result))


def dispatch(event: PlaybackEvent, callbacks: PlaybackCallbacks) -> None:
    if event.kind is EventKind.VISITED:
        callbacks.on_visited(event.cell)
    elif event.kind is EventKind.PATH:
        callbacks.on_path(event.cell)
    else:
        callbacks.on_complete(event.message)


class Playback:
    """Single-use cursor over a result's timeline, paced by a caller-supplied clock."""

    def __init__(self, result: TraversalResult, delays: StepDelays = StepDelays(),
                 live_type: Optional[LiveType] = None):
        self.result = result
        self.delays = delays
        self.live_type = live_type
        self._events = timeline(result, delays)
        self._pending: Optional[PlaybackEvent] = None
        self._last_t: Optional[float] = None
        self.emitted = 0
        self.skipped = 0
        self.finished = False

    def start(self, now: float) -> None:
        """Anchor the first delay at ``now`` (ms)."""
        if self._last_t is None:
            self._last_t = now

    def _stale(self, ev: PlaybackEvent) -> bool:
        # a visited step only ever paints an empty cell
        if ev.kind is not EventKind.VISITED or self.live_type is None:
            return False
        if self.live_type(ev.cell) is CellType.EMPTY:
            return False
        self.skipped += 1
        return True

    def _due(self, now: float) -> Iterator[PlaybackEvent]:
        self.start(now)
        while not self.finished:
            if self._pending is None:
                self._pending = next(self._events, None)
                if self._pending is None:
                    self.finished = True
                    return
            due_at = self._last_t + self._pending.delay
            if now < due_at:
                return
            ev, self._pending = self._pending, None
            if self._stale(ev):
                # the clock stays anchored at the previous event
                continue
            self._last_t = due_at
            self.emitted += 1
            if ev.kind is EventKind.COMPLETE:
                self.finished = True
            yield ev

    def advance(self, now: float) -> List[PlaybackEvent]:
        """Every event that has come due by ``now`` (ms), in order."""
        return list(self._due(now))

    def pump(self, now: float, callbacks: PlaybackCallbacks) -> int:
        """Dispatch due events one at a time; returns how many fired."""
        n = 0
        for ev in self._due(now):
            dispatch(ev, callbacks)
            n += 1
        return n

    def run(self, callbacks: PlaybackCallbacks,
            sleep: Callable[[float], None] = time.sleep) -> None:
        """Blocking drive: sleep out each delay, then dispatch the event.

        A stale visited step is detected when its turn comes, before its
        delay is slept, so it costs no time.
        """
        if self._last_t is not None:
            raise RuntimeError("playback already started")
        self._last_t = 0
        for ev in self._events:
            if self._stale(ev):
                continue
            if ev.delay:
                sleep(ev.delay / 1000.0)
            self._last_t += ev.delay
            self.emitted += 1
            dispatch(ev, callbacks)
        self.finished = True
        logger.debug("replayed %d events (%d skipped)", self.emitted, self.skipped)


def replay(result: TraversalResult, callbacks: PlaybackCallbacks,
           delays: StepDelays = StepDelays(), *, live_type: LiveType,
           sleep: Callable[[float], None] = time.sleep) -> None:
    """Replay ``result`` through ``callbacks``, sleeping between steps.

    ``live_type`` reports the current type of a cell on the grid being
    painted (usually ``grid.cell_type``). It is required: without it the end
    cell would be reported as visited.
    """
    Playback(result, delays, live_type).run(callbacks, sleep)
