"""
comb_core/clock.py — Default time source for COMB identifiers.

Any zero-argument callable returning RFC 4122 ticks (100 ns since
15 Oct 1582 UTC) can stand in for uuid_time.
"""

from __future__ import annotations

import time
from typing import Callable

from .timestamp import unix_ns_to_uuid_time

Clock = Callable[[], int]


def uuid_time() -> int:
    """Current time as 100 ns ticks since the Gregorian epoch."""
    return unix_ns_to_uuid_time(time.time_ns())
