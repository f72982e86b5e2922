"""Resource-prefixed, timestamp-based record identifiers."""

import re
import time
from collections.abc import Callable


def _epoch_ms() -> int:
    return time.time_ns() // 1_000_000


def new_id(prefix: str, clock: Callable[[], int] = _epoch_ms) -> str:
    """Return ``<prefix><milliseconds since epoch>``, e.g. ``LOOKUP1704067200000``.

    Two calls within the same millisecond yield the same id.
    """
    return f"{prefix}{clock()}"


def is_valid_id(prefix: str, value: object) -> bool:
    """Check that *value* looks like an id produced by ``new_id(prefix)``."""
    return isinstance(value, str) and re.fullmatch(rf"{re.escape(prefix)}\d+", value) is not None
