"""
comb_core/timestamp.py — Timestamp region of a COMB identifier.

The timestamp lives in the trailing n bytes (1..8) of the 16-byte
identifier as a big-endian count of resolution-sized units since
15 Oct 1582 00:00 UTC, masked to 8*n bits.

Raw time values are RFC 4122 ticks (100 ns). Conversion to stored
units is exact integer arithmetic with round-half-away-from-zero:

    stored = round(ticks * 100ns / resolution) mod 2^(8n)

For the default resolution of 1/10 ms that is round(ticks / 1000).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from fractions import Fraction
from typing import Optional, Union

from .codec import check_width, decode_fixed_width, encode_fixed_width
from .config import (
    DEFAULT_TIMESTAMP_BYTES,
    GREGORIAN_UNIX_OFFSET_TICKS,
    TICK_NS,
    TICKS_PER_SECOND,
)
from .errors import ConfigurationError


# A resolution is a duration: a timedelta, or an int number of nanoseconds
# for resolutions finer than a microsecond.
Resolution = Union[timedelta, int]

GREGORIAN_EPOCH = datetime(1582, 10, 15, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fixed-point time math
# ---------------------------------------------------------------------------

def resolution_to_ns(resolution: Resolution) -> int:
    """Normalise a resolution to a positive integer of nanoseconds."""
    if isinstance(resolution, timedelta):
        ns = (
            (resolution.days * 86_400 + resolution.seconds) * 1_000_000_000
            + resolution.microseconds * 1_000
        )
    elif isinstance(resolution, int) and not isinstance(resolution, bool):
        ns = resolution
    else:
        raise ConfigurationError(
            f"resolution must be a timedelta or int nanoseconds, "
            f"got {type(resolution).__name__}"
        )
    if ns <= 0:
        raise ConfigurationError(
            f"resolution must be a positive duration, got {ns}ns",
            context={"resolution_ns": ns},
        )
    return ns


def ticks_per_unit(resolution: Resolution) -> Fraction:
    """Raw 100 ns ticks represented by one stored unit.

    Exact; below 1 when the resolution is finer than a tick.
    """
    return Fraction(resolution_to_ns(resolution), TICK_NS)


def _round_half_away(numerator: int, denominator: int) -> int:
    """Integer division rounding halves away from zero (denominator > 0)."""
    q, r = divmod(abs(numerator), denominator)
    if 2 * r >= denominator:
        q += 1
    return q if numerator >= 0 else -q


def to_stored_units(
    ticks: int,
    resolution: Resolution,
    n_bytes: int = DEFAULT_TIMESTAMP_BYTES,
) -> int:
    """Convert ticks to stored units, wrapped to 8*n_bytes bits."""
    check_width(n_bytes)
    resolution_ns = resolution_to_ns(resolution)
    units = _round_half_away(ticks * TICK_NS, resolution_ns)
    return units & ((1 << (n_bytes * 8)) - 1)


# ---------------------------------------------------------------------------
# Read / write
# ---------------------------------------------------------------------------

def _identifier_bytes(id: Union[uuid.UUID, bytes, bytearray, memoryview]) -> bytes:
    if isinstance(id, uuid.UUID):
        return id.bytes
    return bytes(id)


def _check_n_bytes(n_bytes: int, size: int) -> None:
    if n_bytes > size:
        raise ConfigurationError(
            f"too many bytes to format: {n_bytes} > {size}",
            context={"n_bytes": n_bytes, "size": size},
        )


def read_custom_timestamp(
    id: Union[uuid.UUID, bytes, bytearray, memoryview], n_bytes: int
) -> int:
    """Return the integer stored in the trailing n_bytes of id."""
    data = _identifier_bytes(id)
    _check_n_bytes(n_bytes, len(data))
    return decode_fixed_width(data, len(data) - n_bytes, n_bytes)


def read_timestamp(id: Union[uuid.UUID, bytes, bytearray, memoryview]) -> int:
    """Return the 6-byte timestamp of a default-layout identifier."""
    return read_custom_timestamp(id, DEFAULT_TIMESTAMP_BYTES)


def write_timestamp(
    id: bytearray,
    n_bytes: int,
    ticks: int,
    resolution: Resolution,
) -> bytearray:
    """Write ticks at the given resolution into the trailing n_bytes of id.

    The leading len(id) - n_bytes bytes are left untouched. The buffer is
    modified in place and returned for convenience.

    Raises:
        ConfigurationError: n_bytes larger than the identifier, outside
            the codec's 1..8 range, or an unusable resolution.
    """
    _check_n_bytes(n_bytes, len(id))
    units = to_stored_units(ticks, resolution, n_bytes)
    encode_fixed_width(id, len(id) - n_bytes, n_bytes, units)
    return id


# ---------------------------------------------------------------------------
# Wall-clock conversion
# ---------------------------------------------------------------------------

def uuid_time_to_datetime(ticks: int) -> datetime:
    """Convert RFC 4122 ticks to an aware UTC datetime (microsecond precision)."""
    return GREGORIAN_EPOCH + timedelta(microseconds=ticks // 10)


def datetime_to_uuid_time(dt: datetime) -> int:
    """Convert a datetime to RFC 4122 ticks. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - GREGORIAN_EPOCH
    return (
        (delta.days * 86_400 + delta.seconds) * TICKS_PER_SECOND
        + delta.microseconds * 10
    )


def unix_ns_to_uuid_time(unix_ns: int) -> int:
    return unix_ns // TICK_NS + GREGORIAN_UNIX_OFFSET_TICKS


def stored_units_to_datetime(
    units: int,
    resolution: Resolution,
    n_bytes: int = DEFAULT_TIMESTAMP_BYTES,
    reference: Optional[datetime] = None,
) -> datetime:
    """Map stored units back to wall-clock time.

    Stored units only identify a time modulo the wrap span. The wrap
    cycle chosen is the latest one that does not place the result after
    `reference` (default: now). Units that are ahead of the reference in
    the first cycle are returned as-is.

    Raises:
        ConfigurationError: the decoded time lies beyond datetime.max.
    """
    check_width(n_bytes)
    resolution_ns = resolution_to_ns(resolution)
    span = 1 << (n_bytes * 8)
    if reference is None:
        reference = datetime.now(timezone.utc)
    reference_units = _round_half_away(
        datetime_to_uuid_time(reference) * TICK_NS, resolution_ns
    )
    cycle = max((reference_units - units) // span, 0)
    total_ns = (cycle * span + units) * resolution_ns
    try:
        return GREGORIAN_EPOCH + timedelta(microseconds=total_ns // 1_000)
    except OverflowError as exc:
        raise ConfigurationError(
            f"stored units {units} at {resolution_ns}ns fall outside the "
            f"representable datetime range",
            context={"units": units, "resolution_ns": resolution_ns, "n_bytes": n_bytes},
        ) from exc
