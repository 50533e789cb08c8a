"""Built-in theme preset table.

Maps theme name -> variable set. Variable names use underscores here; the
theme switch turns them into hyphenated custom properties
(``color_system`` -> ``--color-system``). Pure data, no Qt dependency.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Final, Mapping

__all__ = ["THEME", "DEFAULT_PRESET", "VarSet", "ThemePreset", "get_preset"]

VarSet = Dict[str, str]
ThemePreset = Mapping[str, Mapping[str, str]]


class THEME:
    LIGHT: Final = "light"
    DARK: Final = "dark"


DEFAULT_PRESET: Final[ThemePreset] = MappingProxyType(
    {
        THEME.LIGHT: MappingProxyType(
            {
                "color_system": "#f3f3f3",
                "color_canvas": "#e2e8ef",
                "color_stroke": "#01413a",
                "color_active": "#03ab99",
                "color_inactive": "#7fa091",
                "color_invalid": "#ab0315",
                "theme_brightness": "0.9",
            }
        ),
        THEME.DARK: MappingProxyType(
            {
                "color_system": "#1f1f1f",
                "color_canvas": "#1a1f24",
                "color_stroke": "#a0f0e6",
                "color_active": "#04d6c1",
                "color_inactive": "#5a7268",
                "color_invalid": "#ff3b4e",
                "theme_brightness": "1.5",
            }
        ),
    }
)


def get_preset(name: str) -> Mapping[str, str] | None:
    return DEFAULT_PRESET.get(name)
