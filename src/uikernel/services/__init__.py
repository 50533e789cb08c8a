"""Kernel services: timing control, registry, event bus and Qt host adapters.

``qt_host`` and ``kernel`` are not imported here so that importing the
package never requires PyQt6.
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, KernelEvent  # noqa: F401
from .timing import debounce, throttle, ManualTimerService, TimerService  # noqa: F401
