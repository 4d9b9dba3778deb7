#!/usr/bin/env python3
"""
COMB Ordering Demo

Shows what the trailing timestamp buys over a plain random UUID.

Flow:
  1. Generate identifiers from a simulated clock, 1 ms apart
  2. Shuffle them
  3. Sort by timestamp bytes → original generation order comes back
  4. Decode each timestamp back to wall-clock time
  5. Print how long the default layout lasts before wrapping

Run:
    pip install -e .
    python examples/demo_ordering.py
"""

import random
from datetime import datetime, timedelta, timezone

from comb_core import (
    CombGenerator,
    TimestampLayout,
    datetime_to_uuid_time,
    stored_units_to_datetime,
)


# ============================================================
# Simulated clock
# ============================================================

def stepping_clock(start: datetime, step: timedelta):
    """Clock returning start, start + step, start + 2*step, ..."""
    ticks = datetime_to_uuid_time(start)
    step_ticks = datetime_to_uuid_time(start + step) - ticks

    def clock() -> int:
        nonlocal ticks
        current = ticks
        ticks += step_ticks
        return current

    return clock


def main() -> None:
    layout = TimestampLayout()
    start = datetime(2025, 3, 14, 15, 9, 26, tzinfo=timezone.utc)
    generator = CombGenerator(layout, clock=stepping_clock(start, timedelta(milliseconds=1)))

    ids = [generator() for _ in range(8)]
    shuffled = ids[:]
    random.shuffle(shuffled)

    print(f"\n{'━' * 72}")
    print("  SHUFFLED")
    print(f"{'━' * 72}")
    for id in shuffled:
        print(f"  {id}")

    restored = sorted(shuffled, key=generator.read)
    print(f"\n{'━' * 72}")
    print("  SORTED BY TIMESTAMP")
    print(f"{'━' * 72}")
    for id in restored:
        units = generator.read(id)
        when = stored_units_to_datetime(units, layout.resolution_ns, reference=start + timedelta(days=1))
        print(f"  {id}  {when.isoformat()}")

    print(f"\n  Order recovered:    {restored == ids}")
    print(f"  Wraps after:        {layout.time_range()}")
    print(f"{'━' * 72}\n")


if __name__ == "__main__":
    main()
