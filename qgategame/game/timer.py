"""Cancellable one-tick-per-second session countdown."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from qgategame.logging import get_logger

logger = get_logger(__name__)


def _current_task() -> Optional["asyncio.Task[None]"]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class CountdownTimer:
    """
    Decrements ``remaining_time`` once per tick while running.

    Ticks come from an asyncio task scheduled on the running event loop.
    Every scheduled task carries a generation number; ``pause`` and
    ``reset`` cancel the task and bump the generation, so a wake-up that
    was already in flight can never touch the counter afterwards. Without
    a running loop the timer still tracks running/paused, and ticks are
    delivered by calling :meth:`tick` directly.

    Args:
        duration: Ticks in a full session.
        tick_seconds: Wall-clock seconds between ticks.
        on_time_up: Called once when the counter reaches zero.
        on_tick: Called after every decrement.
    """

    def __init__(
        self,
        duration: int = 60,
        tick_seconds: float = 1.0,
        on_time_up: Optional[Callable[[], None]] = None,
        on_tick: Optional[Callable[[int], None]] = None,
    ) -> None:
        if duration < 1:
            raise ValueError(f"duration must be >= 1, got {duration}.")
        if tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {tick_seconds}.")

        self.duration = int(duration)
        self.tick_seconds = float(tick_seconds)
        self.on_time_up = on_time_up
        self.on_tick = on_tick
        self.remaining_time = self.duration

        self._running = False
        self._generation = 0
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Restart from the full duration."""
        self.pause()
        self.remaining_time = self.duration
        self.resume()

    def resume(self) -> None:
        """Continue ticking; no-op if already running or expired."""
        if self._running or self.remaining_time <= 0:
            return

        self._running = True
        self._generation += 1

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; countdown advances on tick() only")
            return

        self._task = loop.create_task(self._run(self._generation))
        self._task.add_done_callback(self._on_task_done)

    def pause(self) -> None:
        """Stop ticking immediately; the remaining time is kept."""
        self._running = False
        self._generation += 1
        self._cancel_task()

    def reset(self) -> None:
        """Stop ticking and restore the full duration."""
        self.pause()
        self.remaining_time = self.duration

    def tick(self) -> None:
        """Advance the countdown by one tick if running."""
        if not self._running:
            return

        self.remaining_time -= 1
        if self.on_tick is not None:
            self.on_tick(self.remaining_time)

        if self.remaining_time <= 0:
            self.remaining_time = 0
            self.pause()
            logger.debug("Countdown expired")
            if self.on_time_up is not None:
                self.on_time_up()

    async def _run(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self.tick_seconds)
            if generation != self._generation or not self._running:
                return
            self.tick()
            if generation != self._generation:
                return

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        if task.cancelled() or task.exception() is None:
            return
        logger.error("Countdown stopped by a failing callback", exc_info=task.exception())
        if self._task is task:
            self._task = None
            self._running = False

    def _cancel_task(self) -> None:
        task, self._task = self._task, None
        if task is not None and task is not _current_task() and not task.done():
            task.cancel()
