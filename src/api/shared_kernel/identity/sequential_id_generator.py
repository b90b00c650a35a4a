"""Sequential identifier generation for record primary keys.

Identifiers are 128-bit values in the ULID byte layout: a 48-bit Unix
millisecond timestamp followed by 80 bits of cryptographic randomness.
Because the timestamp leads, freshly generated ids land at the end of
ordered indexes instead of at random positions.

This is part of the Shared Kernel - every record type uses these ids.
"""

from __future__ import annotations

import secrets
import threading
import time
import uuid
from typing import Callable

TIMESTAMP_BYTES = 6
RANDOMNESS_BYTES = 10

_MAX_RANDOMNESS = (1 << (RANDOMNESS_BYTES * 8)) - 1


def _unix_millis() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def _random_component() -> int:
    """Draw a fresh random component from the OS entropy source."""
    return int.from_bytes(secrets.token_bytes(RANDOMNESS_BYTES), "big")


class SequentialIdGenerator:
    """Generates time-ordered, globally unique identifiers.

    Within one generator the output is strictly increasing under byte-wise
    comparison. When the clock has not moved forward since the previous id
    (same millisecond, or a clock step backwards), the previous timestamp is
    reused and the random component is incremented by one. If that increment
    would overflow 80 bits, the timestamp component is advanced by one
    millisecond and a fresh random component is drawn.

    Uniqueness across processes comes from the random component: two
    processes only collide if they pick the same 80 random bits in the
    same millisecond.

    Example:
        >>> generator = SequentialIdGenerator()
        >>> first = generator.new_id()
        >>> second = generator.new_id()
        >>> first.bytes < second.bytes
        True
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        """Initialize the generator.

        Args:
            clock: Callable returning the current Unix time in milliseconds.
                Defaults to the system clock.
        """
        self._clock = clock or _unix_millis
        self._lock = threading.Lock()
        self._last_timestamp = -1
        self._last_randomness = 0

    def new_id(self) -> uuid.UUID:
        """Generate the next identifier.

        Returns:
            A UUID whose canonical string form is the boundary representation
        """
        with self._lock:
            timestamp = self._clock()
            if timestamp > self._last_timestamp:
                randomness = _random_component()
            else:
                timestamp = self._last_timestamp
                randomness = self._last_randomness + 1
                if randomness > _MAX_RANDOMNESS:
                    timestamp += 1
                    randomness = _random_component()

            self._last_timestamp = timestamp
            self._last_randomness = randomness

        raw = timestamp.to_bytes(TIMESTAMP_BYTES, "big") + randomness.to_bytes(
            RANDOMNESS_BYTES, "big"
        )
        return uuid.UUID(bytes=raw)


_default_generator = SequentialIdGenerator()


def new_id() -> uuid.UUID:
    """Generate an identifier from the process-wide generator."""
    return _default_generator.new_id()


def parse_id(value: str) -> uuid.UUID:
    """Parse a serialized identifier.

    Accepts the canonical hyphenated hex form in either case.

    Args:
        value: The serialized identifier

    Returns:
        The parsed UUID

    Raises:
        ValueError: If value is not a hyphenated 128-bit hex identifier
    """
    if not isinstance(value, str) or len(value) != 36:
        raise ValueError(f"Invalid identifier: {value!r}")
    parsed = uuid.UUID(value)
    if str(parsed) != value.lower():
        raise ValueError(f"Invalid identifier: {value!r}")
    return parsed
