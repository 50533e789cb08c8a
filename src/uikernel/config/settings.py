"""Global configuration constants for the presentation kernel.

Values are read once from the environment at import time; anything that does
not parse falls back to the built-in default.
"""

from __future__ import annotations

import os
from typing import Final

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


# Element ids ------------------------------------------------------------
ID_LENGTH: Final = _env_int("UIKERNEL_ID_LENGTH", 3)
ID_STORE_LIMIT: Final = _env_int("UIKERNEL_ID_STORE_LIMIT", 10_000)

# Class resolution -------------------------------------------------------
# Whether plain-string styles keep the neutral state token ("name part neutral").
APPEND_NEUTRAL_STATE: Final = _env_flag("UIKERNEL_APPEND_NEUTRAL_STATE")

# Theme ------------------------------------------------------------------
CSS_VAR_PREFIX: Final = os.environ.get("UIKERNEL_CSS_VAR_PREFIX", "--") or "--"
