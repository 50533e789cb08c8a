"""Small helpers widgets use when forwarding props."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

__all__ = ["omit", "is_unsigned_integer"]


def omit(mapping: Optional[Mapping[str, Any]], *keys: str) -> Dict[str, Any]:
    """Return a shallow copy of ``mapping`` without ``keys`` (``{}`` for ``None``)."""
    if not mapping:
        return {}
    dropped = set(keys)
    return {k: v for k, v in mapping.items() if k not in dropped}


def is_unsigned_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer() and value >= 0
    return False
