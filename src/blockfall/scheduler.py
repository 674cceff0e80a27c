"""Gravity tick scheduling.

The host supplies a periodic timer through the :class:`Timer` protocol.  Two
implementations ship with the package: :class:`AsyncioTimer` for event-loop
driven front-ends and :class:`ManualTimer`, whose clock only moves when
:meth:`ManualTimer.advance` is called (headless runs and tests).

:class:`TickScheduler` wraps a timer and tags every emitted tick with the
generation it was armed under.  Stopping or re-arming bumps the generation,
so a tick that was already in flight can be recognised as stale and dropped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from .config import GRAVITY_MS


LOGGER = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Timer(Protocol):
    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Invoke ``callback`` every ``interval_ms`` until the handle is cancelled."""
        ...


@dataclass
class _ManualEntry:
    interval: float
    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimer:
    """Periodic timer driven by an explicitly advanced clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self._entries: List[_ManualEntry] = []

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> _ManualEntry:
        entry = _ManualEntry(interval=interval_ms, due=self.now + interval_ms, callback=callback)
        self._entries.append(entry)
        return entry

    @property
    def pending(self) -> int:
        """Number of live (not cancelled) periodic callbacks."""

        self._entries = [e for e in self._entries if not e.cancelled]
        return len(self._entries)

    def advance(self, delta_ms: float) -> None:
        """Move the clock forward, firing every callback that falls due.

        Callbacks fire in due order.  A callback may cancel or register timers;
        newly registered timers count from the moment they were created.
        """

        target = self.now + delta_ms
        while True:
            live = [e for e in self._entries if not e.cancelled and e.due <= target]
            if not live:
                break
            entry = min(live, key=lambda e: e.due)
            self.now = entry.due
            entry.due += entry.interval
            entry.callback()
        self.now = target
        self._entries = [e for e in self._entries if not e.cancelled]


class _AsyncioHandle:
    __slots__ = ("_loop", "_delay", "_callback", "_handle", "_cancelled")

    def __init__(self, loop: asyncio.AbstractEventLoop, delay: float, callback: Callable[[], None]) -> None:
        self._loop = loop
        self._delay = delay
        self._callback = callback
        self._cancelled = False
        self._handle: Optional[asyncio.TimerHandle] = loop.call_later(delay, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._handle = self._loop.call_later(self._delay, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioTimer:
    """Periodic timer backed by ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> _AsyncioHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioHandle(loop, interval_ms / 1000.0, callback)


class TickScheduler:
    """Emit gravity ticks at a fixed period while armed."""

    def __init__(
        self,
        timer: Timer,
        on_tick: Callable[[int], None],
        *,
        interval_ms: float = GRAVITY_MS,
    ) -> None:
        self._timer = timer
        self._on_tick = on_tick
        self.interval_ms = interval_ms
        self.generation = 0
        self._handle: Optional[TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """(Re)arm emission; the first tick comes one full period from now."""

        self.stop()
        generation = self.generation
        self._handle = self._timer.call_every(self.interval_ms, lambda: self._fire(generation))
        LOGGER.debug("Gravity armed (generation %d, every %sms)", generation, self.interval_ms)

    def stop(self) -> None:
        """Cancel emission and invalidate ticks already handed out."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.generation += 1

    def is_current(self, generation: int) -> bool:
        return self._handle is not None and generation == self.generation

    def _fire(self, generation: int) -> None:
        if not self.is_current(generation):
            return
        self._on_tick(generation)
