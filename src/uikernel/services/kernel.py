"""Startup wiring for the kernel's shared instances.

``create_kernel`` builds the event bus, element id pool, timer service and
theme switch exactly once and registers them in a ``ServiceLocator`` so
widgets receive explicit instances rather than import-time globals.

Headless callers pass their own timer service / target (or none); when
``timers`` is omitted a ``QtTimerService`` is created, which is imported
lazily so that test collection does not pull in PyQt6.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from uikernel.design.theme_presets import DEFAULT_PRESET
from uikernel.design.theme_switch import ColorSchemeSource, PresentationTarget, ThemeSwitch
from uikernel.utils.unique_id import UniqueId

from .event_bus import EventBus
from .service_locator import (
    EVENT_BUS,
    ID_POOL,
    THEME,
    TIMER_SERVICE,
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    services,
)
from .timing import TimerService

__all__ = ["KernelContext", "create_kernel"]

_logger = logging.getLogger(__name__)

_KEYS = (EVENT_BUS, ID_POOL, TIMER_SERVICE, THEME)
_MISSING = object()


@dataclass
class KernelContext:
    services: ServiceLocator
    event_bus: EventBus
    id_pool: UniqueId
    timers: TimerService
    theme: ThemeSwitch


def create_kernel(
    locator: Optional[ServiceLocator] = None,
    *,
    timers: Optional[TimerService] = None,
    target: Optional[PresentationTarget] = None,
    environment: Optional[ColorSchemeSource] = None,
    preset: Optional[Mapping[str, Mapping[str, str]]] = None,
    id_pool: Optional[UniqueId] = None,
    allow_override: bool = False,
) -> KernelContext:
    """Create and register the shared kernel services.

    Raises ``ServiceAlreadyRegisteredError`` when any kernel key is already
    taken unless ``allow_override`` is set; in that case nothing is built or
    registered.
    """
    registry = locator if locator is not None else services
    if not allow_override:
        taken = [key for key in _KEYS if registry.try_get(key, _MISSING) is not _MISSING]
        if taken:
            raise ServiceAlreadyRegisteredError(
                f"Kernel services already registered: {', '.join(taken)}"
            )
    if timers is None:
        from .qt_host import QtTimerService

        timers = QtTimerService()
    bus = EventBus()
    pool = id_pool if id_pool is not None else UniqueId()
    theme = ThemeSwitch(target=target, environment=environment, bus=bus)
    theme.set_preset(DEFAULT_PRESET if preset is None else preset)
    for key, value in (
        (EVENT_BUS, bus),
        (ID_POOL, pool),
        (TIMER_SERVICE, timers),
        (THEME, theme),
    ):
        registry.register(key, value, allow_override=allow_override)
    _logger.debug("Kernel services registered (theme=%s)", theme.current)
    return KernelContext(services=registry, event_bus=bus, id_pool=pool, timers=timers, theme=theme)
