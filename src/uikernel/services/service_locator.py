"""Registry for the kernel's shared instances.

The element id pool, timer service, event bus and theme switch are created
once at startup (see ``uikernel.services.kernel``) and looked up by widgets
through this registry instead of module-level singletons.

Usage pattern:
    from uikernel.services.service_locator import services, ID_POOL
    pool = services.get(ID_POOL)

In tests:
    with services.override_context(timer_service=ManualTimerService()):
        ...

Keys are plain strings; the well-known ones are exported as constants.
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Generator, Type, TypeVar

T = TypeVar("T")

__all__ = [
    "ServiceLocator",
    "services",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EVENT_BUS",
    "ID_POOL",
    "TIMER_SERVICE",
    "THEME",
]

EVENT_BUS = "event_bus"
ID_POOL = "id_pool"
TIMER_SERVICE = "timer_service"
THEME = "theme"

_MISSING = object()


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when registering an existing key without allow_override."""


class ServiceNotFoundError(KeyError):
    """Raised when a requested service key is not present."""


class ServiceLocator:
    def __init__(self) -> None:
        self._lock = RLock()
        self._services: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        with self._lock:
            if key in self._services and not allow_override:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._services[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._services:
                raise ServiceNotFoundError(key)
            return self._services[key]

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        """Retrieve a service and check it is an ``expected_type`` instance."""
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(
                f"Service '{key}' expected type {expected_type!r} but got {type(value)!r}"
            )
        return value

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._services.get(key, default)

    @contextmanager
    def override_context(self, **overrides: Any) -> Generator[None, None, None]:
        """Temporarily replace (or add) services; previous state restored on exit."""
        with self._lock:
            previous = {key: self._services.get(key, _MISSING) for key in overrides}
            self._services.update(overrides)
        try:
            yield
        finally:
            with self._lock:
                for key, prior in previous.items():
                    if prior is _MISSING:
                        self._services.pop(key, None)
                    else:
                        self._services[key] = prior

    def unregister(self, key: str) -> None:
        with self._lock:
            self._services.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._services.clear()


# Process-wide registry; create_kernel() fills it at startup.
services = ServiceLocator()
