"""Short element id generation.

Widgets link labels and descriptions to their controls through element ids.
``UniqueId`` hands out short alphabetic ids that are unique among the ids it
currently tracks.

Notes:
 - Alphabet is 50 letters (``A``-``Y`` and ``a``-``y``); ``Z``/``z`` are never
   produced so hand-written ids starting with them cannot collide.
 - The tracking set is cleared wholesale once it grows past ``limit``
   (session-scoped uniqueness, not an LRU).
 - Randomness comes from ``random.Random``; ids are not secrets.
"""

from __future__ import annotations

import logging
import random
import string
from typing import Any, Optional, Set

from uikernel.config import settings

__all__ = ["UniqueId", "ALPHABET", "MIN_LENGTH", "DEFAULT_LIMIT"]

_logger = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase[:25] + string.ascii_lowercase[:25]
MIN_LENGTH = 3
DEFAULT_LIMIT = 10_000


class UniqueId:
    """Collision-avoiding short id pool."""

    def __init__(
        self,
        length: Any = None,
        limit: Any = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        if length is None:
            length = settings.ID_LENGTH
        if limit is None:
            limit = settings.ID_STORE_LIMIT
        self._length = length if isinstance(length, int) and length >= MIN_LENGTH else MIN_LENGTH
        space = len(ALPHABET) ** self._length
        if isinstance(limit, int) and 0 < limit < space:
            self._limit = limit
        else:
            self._limit = min(DEFAULT_LIMIT, space - 1)
        self._rng = rng or random.Random()
        self._store: Set[str] = set()

    @property
    def length(self) -> int:
        return self._length

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def tracked(self) -> int:
        return len(self._store)

    @property
    def id(self) -> str:
        """Mint an id unconditionally."""
        return self._add()

    def get(self, condition: Any) -> Optional[str]:
        """Return a new id when ``condition`` is truthy, otherwise ``None``."""
        if not condition:
            return None
        return self._add()

    def _gen(self) -> str:
        return "".join(self._rng.choice(ALPHABET) for _ in range(self._length))

    def _add(self) -> str:
        if len(self._store) > self._limit:
            _logger.debug("Element id store exceeded %d entries; resetting", self._limit)
            self._store.clear()
        candidate = self._gen()
        while candidate in self._store:
            candidate = self._gen()
        self._store.add(candidate)
        return candidate
