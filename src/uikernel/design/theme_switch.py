"""Theme preference tracking.

``ThemeSwitch`` holds the active theme name and pushes that theme's variable
set onto a presentation target (custom properties on the document root in a
browser-like host, ``QssVariableTarget`` in the Qt app).

Lifecycle:
 - Construction picks the initial theme: explicit ``initial``, otherwise
   ``light`` when the environment explicitly prefers light and ``dark`` in
   every other case (including no environment).
 - ``set_preset`` registers the theme table, renaming ``color_canvas`` style
   keys to ``--color-canvas`` custom properties, and tells the target which of
   the built-in light/dark names are available.
 - ``switch`` ignores unregistered names; before ``set_preset`` every switch
   is therefore a no-op.

A missing target turns every write into a no-op so the switch can live in
headless processes. Changes are announced on the optional ``EventBus``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol

from uikernel.config import settings
from uikernel.services.event_bus import EventBus, KernelEvent

from .theme_presets import THEME, VarSet

__all__ = ["ThemeSwitch", "PresentationTarget", "ColorSchemeSource", "to_custom_property"]

_logger = logging.getLogger(__name__)


class PresentationTarget(Protocol):
    def set_variable(self, name: str, value: str) -> None: ...  # pragma: no cover - structural

    def set_color_scheme(self, value: str) -> None: ...  # pragma: no cover - structural


class ColorSchemeSource(Protocol):
    def prefers_light(self) -> Optional[bool]: ...  # pragma: no cover - structural


def to_custom_property(name: str, prefix: str = "--") -> str:
    return f"{prefix}{name.replace('_', '-')}"


@dataclass
class ThemeSwitch:
    target: Optional[PresentationTarget] = None
    environment: Optional[ColorSchemeSource] = None
    initial: Optional[str] = None
    bus: Optional[EventBus] = None
    prefix: str = field(default_factory=lambda: settings.CSS_VAR_PREFIX)
    _styles: Dict[str, VarSet] = field(default_factory=dict, init=False, repr=False)
    _current: str = field(default=THEME.DARK, init=False)

    def __post_init__(self) -> None:
        self._current = self.initial or self._environment_theme()
        self._apply()

    # Public API -----------------------------------------------------------
    @property
    def current(self) -> str:
        return self._current

    @property
    def themes(self) -> List[str]:
        return list(self._styles)

    def variables(self) -> Mapping[str, str]:
        """Custom properties of the active theme (empty when unregistered)."""
        return dict(self._styles.get(self._current, {}))

    def set_preset(self, preset: Mapping[str, Mapping[str, str]]) -> "ThemeSwitch":
        self._styles = {
            theme: {to_custom_property(k, self.prefix): v for k, v in values.items()}
            for theme, values in preset.items()
        }
        schemes = [name for name in (THEME.LIGHT, THEME.DARK) if name in self._styles]
        if schemes and self.target is not None:
            self.target.set_color_scheme(" ".join(schemes))
        _logger.debug("Registered themes %s", ", ".join(self._styles) or "-")
        if self.bus is not None:
            self.bus.publish(KernelEvent.THEME_PRESET_CHANGED, {"themes": self.themes})
        self._apply()
        return self

    def switch(self, name: str) -> None:
        if name not in self._styles:
            _logger.debug("Ignoring switch to unregistered theme %r", name)
            return
        previous = self._current
        self._current = name
        self._apply()
        if previous != name:
            _logger.debug("Theme switched %s -> %s", previous, name)
            if self.bus is not None:
                self.bus.publish(
                    KernelEvent.THEME_CHANGED, {"previous": previous, "current": name}
                )

    def to_light(self) -> None:
        self.switch(THEME.LIGHT)

    def to_dark(self) -> None:
        self.switch(THEME.DARK)

    # Internal -------------------------------------------------------------
    def _environment_theme(self) -> str:
        if self.environment is not None and self.environment.prefers_light() is True:
            return THEME.LIGHT
        return THEME.DARK

    def _apply(self) -> None:
        if self.target is None:
            return
        for name, value in self._styles.get(self._current, {}).items():
            self.target.set_variable(name, value)
