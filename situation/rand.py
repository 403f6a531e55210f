"""Random numbers from the system source, with a weaker fallback."""

from __future__ import annotations

import os
import random


def fallback_random_bytes(size: int) -> bytes:
    """Return pseudo-random bytes when the system source is unavailable."""
    return random.Random().randbytes(size)


def rand_bytes(size: int) -> bytes:
    """Return size random bytes."""
    try:
        return os.urandom(size)
    except NotImplementedError:
        return fallback_random_bytes(size)


def rand_uint16(maximum: int) -> int:
    """Return an integer in [0, maximum)."""
    if not 0 < maximum <= 0xFFFF:
        raise ValueError(f"maximum must be in (0, 65535], got {maximum}")
    return int.from_bytes(rand_bytes(2), "big") % maximum


def random_tcp_port(a: int, b: int) -> int:
    """Return a port p with min(a, b) <= p < max(a, b)."""
    low, high = sorted((a, b))
    return low + rand_uint16(high - low)