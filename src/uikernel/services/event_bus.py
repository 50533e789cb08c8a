"""Synchronous publish/subscribe for kernel notifications.

Widgets subscribe to ``KernelEvent.THEME_CHANGED`` to refresh anything that
is not driven by custom properties (icons, chart palettes).

 - Handlers run in subscription order on the publishing thread
 - One failing handler does not break the publish cycle; failures are kept
   in ``EventBus.errors`` and logged
 - ``once`` subscriptions are dropped after their first successful call
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = ["KernelEvent", "Event", "EventBus", "EventHandler", "Subscription"]

_logger = logging.getLogger(__name__)


class KernelEvent(str, Enum):
    THEME_CHANGED = "theme_changed"
    THEME_PRESET_CHANGED = "theme_preset_changed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | KernelEvent) -> str:
    return name.value if isinstance(name, KernelEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked without holding the lock (copy-first) so they may
    subscribe or unsubscribe while being dispatched.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | KernelEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def publish(self, name: str | KernelEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _logger.exception("Handler for %s failed", key)
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | KernelEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()
