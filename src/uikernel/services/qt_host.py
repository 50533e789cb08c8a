"""PyQt6 host adapters for the kernel.

The kernel itself is headless; these classes connect it to a running Qt
application:

 - ``QtTimerService``: single-shot ``QTimer`` scheduling for debounce/throttle
 - ``QtColorSchemeSource``: light/dark preference from ``QStyleHints``
 - ``QssVariableTarget``: custom-property store that expands ``var(--name)``
   references in a QSS template and applies the result as a style sheet

All adapters degrade to no-ops when no ``QApplication`` exists, so they can be
constructed in headless tests.
"""

from __future__ import annotations

import itertools
import logging
import math
import re
import time
from typing import Callable, Dict, Mapping, Optional

from PyQt6.QtCore import QCoreApplication, QObject, Qt, QTimer
from PyQt6.QtGui import QGuiApplication

from .timing import TimerHandle

__all__ = ["QtTimerService", "QtColorSchemeSource", "QssVariableTarget"]

_logger = logging.getLogger(__name__)

_VAR_RE = re.compile(r"var\((--[A-Za-z0-9_-]+)\)")


class QtTimerService:
    """Timer service backed by single-shot precise ``QTimer`` objects.

    Callbacks run on the Qt event loop. A callback exception cannot propagate
    through the event loop, so it is logged and the loop keeps running.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        self._seq = itertools.count(1)
        self._timers: Dict[TimerHandle, QTimer] = {}

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = next(self._seq)
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.timeout.connect(lambda: self._fire(handle, callback))  # type: ignore[attr-defined]
        self._timers[handle] = timer
        # QTimer rejects negative intervals
        timer.start(max(0, math.ceil(delay_ms)))
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is None:
            return
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def pending(self) -> int:
        return len(self._timers)

    def _fire(self, handle: TimerHandle, callback: Callable[[], None]) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.deleteLater()
        try:
            callback()
        except Exception:  # noqa: BLE001 - nothing above the event loop can handle it
            _logger.exception("Deferred callback %s failed", handle)


class QtColorSchemeSource:
    """Reads the platform light/dark preference from the running application."""

    def prefers_light(self) -> Optional[bool]:
        if not isinstance(QCoreApplication.instance(), QGuiApplication):
            return None
        hints = QGuiApplication.styleHints()
        if hints is None or not hasattr(hints, "colorScheme"):
            return None
        scheme = hints.colorScheme()
        if scheme == Qt.ColorScheme.Unknown:
            return None
        return scheme == Qt.ColorScheme.Light


class QssVariableTarget:
    """Presentation target applying custom properties through a QSS template.

    QSS has no native custom properties; ``var(--name)`` references in the
    template are expanded from the stored variables on every change. Unknown
    references are left untouched. The style sheet goes to ``widget`` when
    given, otherwise to the running ``QApplication``.
    """

    def __init__(self, widget: Optional[QObject] = None, template: str = "") -> None:
        self._widget = widget
        self._template = template
        self._variables: Dict[str, str] = {}
        self.color_scheme: Optional[str] = None

    @property
    def variables(self) -> Mapping[str, str]:
        return self._variables

    def set_template(self, template: str) -> None:
        self._template = template
        self._apply()

    def set_variable(self, name: str, value: str) -> None:
        self._variables[name] = value
        self._apply()

    def set_color_scheme(self, value: str) -> None:
        self.color_scheme = value
        host = self._host()
        if host is not None:
            host.setProperty("colorScheme", value)

    def render(self) -> str:
        return _VAR_RE.sub(lambda m: self._variables.get(m.group(1), m.group(0)), self._template)

    def _host(self) -> Optional[QObject]:
        return self._widget if self._widget is not None else QCoreApplication.instance()

    def _apply(self) -> None:
        if not self._template:
            return
        host = self._host()
        if host is None or not hasattr(host, "setStyleSheet"):
            return
        host.setStyleSheet(self.render())
