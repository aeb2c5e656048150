"""Cancelable deferred callbacks driven by the front-end's frame loop."""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional


def _default_clock() -> float:
    return time.perf_counter() * 1000.0


@dataclass(order=True)
class ScheduledTask:
    """A callback due at ``due`` milliseconds on the scheduler's clock."""

    due: float
    seq: int
    callback: Callable[[], object] = field(compare=False)
    name: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    done: bool = field(default=False, compare=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)


class Scheduler:
    """Run callbacks after a delay without threads.

    Nothing fires on its own: the owner calls :meth:`run_due` (typically once
    per frame) and every task whose due time has passed runs in order.
    """

    def __init__(self, *, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or _default_clock
        self._queue: List[ScheduledTask] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(
        self, delay_ms: float, callback: Callable[[], object], *, name: str = ""
    ) -> ScheduledTask:
        """Schedule ``callback`` to run ``delay_ms`` milliseconds from now."""

        task = ScheduledTask(
            due=self._clock() + max(0.0, float(delay_ms)),
            seq=next(self._counter),
            callback=callback,
            name=name,
        )
        heapq.heappush(self._queue, task)
        return task

    def cancel(self, task: ScheduledTask) -> bool:
        """Cancel ``task``; returns ``False`` if it already ran or was cancelled."""

        if not task.active:
            return False
        task.cancelled = True
        return True

    def cancel_all(self) -> int:
        """Cancel every pending task and return how many were cancelled."""

        cancelled = 0
        for task in self._queue:
            if self.cancel(task):
                cancelled += 1
        self._queue.clear()
        return cancelled

    @property
    def pending(self) -> int:
        return sum(1 for task in self._queue if task.active)

    def next_due(self) -> Optional[float]:
        """Return the due time of the earliest pending task, if any."""

        active = [task.due for task in self._queue if task.active]
        return min(active) if active else None

    def run_due(self, now: Optional[float] = None) -> int:
        """Run every task due at ``now`` (default: the clock) and return the count.

        Tasks scheduled by a callback only run in this pass if they are
        already due.
        """

        if now is None:
            now = self._clock()
        ran = 0
        while self._queue and self._queue[0].due <= now:
            task = heapq.heappop(self._queue)
            if not task.active:
                continue
            task.done = True
            task.callback()
            ran += 1
        return ran
