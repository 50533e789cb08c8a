"""Identity and prop helpers."""

from .unique_id import UniqueId, ALPHABET  # noqa: F401
from .props import omit, is_unsigned_integer  # noqa: F401
