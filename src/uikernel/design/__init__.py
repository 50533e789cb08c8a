"""Design kernel: class-name rule resolution and theme switching."""

from .class_rules import (  # noqa: F401
    BASE,
    REGIONS,
    STATES,
    Region,
    State,
    Single,
    Multiple,
    resolve_class_fn,
    is_neutral,
    join_classes,
)
from .theme_presets import THEME, DEFAULT_PRESET  # noqa: F401
from .theme_switch import ThemeSwitch  # noqa: F401
