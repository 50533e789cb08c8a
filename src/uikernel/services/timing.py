"""Debounce / throttle wrappers over a host timer service.

Widgets wrap high-frequency handlers (input, resize, scroll) so the real work
runs at most once per quiet period (``debounce``) or once per interval
(``throttle``). Deferred work is scheduled through a ``TimerService``:

 - ``QtTimerService`` (``uikernel.services.qt_host``) runs callbacks on the Qt
   event loop
 - ``ManualTimerService`` is a virtual clock advanced explicitly, used for
   headless runs and tests

Semantics
---------
debounce(delay, fn)
    Every call cancels the pending invocation and schedules a new one
    ``delay`` ms later with the latest arguments.
throttle(interval, fn)
    The very first call runs synchronously. Later calls cancel the pending
    deferred invocation and schedule one for the remaining time until
    ``interval`` has passed since the last real invocation, carrying the
    latest arguments.

Neither wrapper validates its timing argument, and neither returns the wrapped
function's result. Exceptions raised by ``fn`` propagate out of the timer
callback into the timer service (``ManualTimerService.advance`` re-raises,
``QtTimerService`` logs them). Throttle stamps the invocation time before
calling ``fn`` so a failing function still counts as invoked.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from .service_locator import TIMER_SERVICE, services

__all__ = [
    "TimerHandle",
    "TimerService",
    "ManualTimerService",
    "default_timer_service",
    "debounce",
    "throttle",
]

_logger = logging.getLogger(__name__)

TimerHandle = int


class TimerService(Protocol):
    def now_ms(self) -> float: ...  # pragma: no cover - structural

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle: ...  # pragma: no cover

    def cancel(self, handle: Optional[TimerHandle]) -> None: ...  # pragma: no cover


class ManualTimerService:
    """Virtual clock timer service.

    Time only moves through ``advance``; due callbacks run in due-time order
    (ties in scheduling order). Negative delays count as zero.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._seq = itertools.count(1)
        self._pending: Dict[TimerHandle, Tuple[float, Callable[[], None]]] = {}

    def now_ms(self) -> float:
        return self._now

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = next(self._seq)
        self._pending[handle] = (self._now + max(0.0, float(delay_ms)), callback)
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    def pending(self) -> int:
        return len(self._pending)

    def advance(self, ms: float) -> None:
        target = self._now + ms
        while True:
            due = [(when, handle) for handle, (when, _) in self._pending.items() if when <= target]
            if not due:
                break
            when, handle = min(due)
            _, callback = self._pending.pop(handle)
            self._now = when
            callback()
        self._now = target


def default_timer_service() -> TimerService:
    """Registered ``timer_service`` or a fresh Qt-backed one."""
    registered = services.try_get(TIMER_SERVICE)
    if registered is not None:
        return registered
    from .qt_host import QtTimerService  # local import keeps PyQt6 out of import time

    return QtTimerService()


def debounce(
    delay_ms: float, fn: Callable[..., Any], *, timers: Optional[TimerService] = None
) -> Callable[..., None]:
    clock = timers if timers is not None else default_timer_service()
    handle: Optional[TimerHandle] = None

    def debounced(*args: Any, **kwargs: Any) -> None:
        nonlocal handle
        clock.cancel(handle)

        def fire() -> None:
            nonlocal handle
            handle = None
            fn(*args, **kwargs)

        handle = clock.schedule(delay_ms, fire)

    return debounced


def throttle(
    interval_ms: float, fn: Callable[..., Any], *, timers: Optional[TimerService] = None
) -> Callable[..., None]:
    clock = timers if timers is not None else default_timer_service()
    handle: Optional[TimerHandle] = None
    last: Optional[float] = None

    def run(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        nonlocal last
        last = clock.now_ms()
        fn(*args, **kwargs)

    def throttled(*args: Any, **kwargs: Any) -> None:
        nonlocal handle
        if last is None:
            run(args, kwargs)
            return
        clock.cancel(handle)
        started = last

        def fire() -> None:
            nonlocal handle
            handle = None
            if clock.now_ms() - started >= interval_ms:
                run(args, kwargs)
            else:
                _logger.debug("Throttled call fired early; dropped")

        handle = clock.schedule(interval_ms - (clock.now_ms() - last), fire)

    return throttled
