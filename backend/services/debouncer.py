"""Debounce a callback on the running asyncio loop."""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

logger = logging.getLogger(__name__)


def _as_delay_seconds(delay_ms: Any) -> float:
    # bool is an int subclass but never a meaningful delay
    if isinstance(delay_ms, bool) or not isinstance(delay_ms, (int, float)):
        return 0.0
    if delay_ms != delay_ms or delay_ms <= 0:  # NaN or non-positive
        return 0.0
    return float(delay_ms) / 1000.0


class Debouncer:
    """
    Wrap `callback` so that a burst of calls produces a single invocation.

    Each call cancels the pending invocation and schedules a new one `delay_ms`
    later; only the arguments of the last call are delivered. Non-numeric or
    non-positive delays fire on the next loop iteration. Coroutine functions
    are scheduled as tasks when the timer fires.
    """

    def __init__(self, callback: Callable[..., Any], delay_ms: Any = 0):
        self.callback = callback
        self.delay = _as_delay_seconds(delay_ms)
        self._handle: Optional[asyncio.TimerHandle] = None
        # running coroutine callbacks; held so they are not collected mid-flight
        self._tasks: Set[asyncio.Task] = set()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire, args, kwargs)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple, kwargs: dict) -> None:
        self._handle = None
        result = self.callback(*args, **kwargs)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Debounced callback %s failed: %s",
                getattr(self.callback, "__name__", self.callback),
                exc,
                exc_info=exc,
            )


def debounce(callback: Callable[..., Any], delay_ms: Any = 0) -> Debouncer:
    return Debouncer(callback, delay_ms)
