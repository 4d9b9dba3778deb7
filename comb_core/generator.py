"""
comb_core/generator.py — COMB identifier generation.

Default layout: 10 bytes (73 usable bits) of cryptographically random
data followed by a 6-byte timestamp at 1/10 ms resolution, covering
about 892 years before wrapping. With the marker enabled, 7 bits are
fixed to remain RFC 4122 parseable: version 6 and the variant reserved
for future definition.

Build order (the marker must come last or it would be clobbered):
    zeroed buffer → timestamp → random fill → marker

Either a complete identifier is returned or an exception is raised;
no partially built buffer escapes.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from .clock import Clock, uuid_time
from .config import (
    UUID_SIZE,
    VARIANT_BITS,
    VARIANT_BYTE,
    VARIANT_MASK,
    VERSION_BITS,
    VERSION_BYTE,
    VERSION_MASK,
)
from .entropy import EntropySource, SystemEntropy, read_full
from .errors import ConfigurationError, EntropyError, GenerationError
from .layout import TimestampLayout
from .timestamp import Resolution, read_custom_timestamp, write_timestamp

logger = logging.getLogger(__name__)

_SYSTEM_ENTROPY = SystemEntropy()
_DEFAULT_LAYOUT = TimestampLayout()


def apply_format_marker(buffer: bytearray) -> bytearray:
    """Force version 6 into byte 6 and variant 0b111 into byte 8, in place."""
    buffer[VERSION_BYTE] = (buffer[VERSION_BYTE] & VERSION_MASK) | VERSION_BITS
    buffer[VARIANT_BYTE] = (buffer[VARIANT_BYTE] & VARIANT_MASK) | VARIANT_BITS
    return buffer


def custom_timestamped_uuid(
    entropy: EntropySource,
    n_bytes: int,
    ticks: int,
    resolution: Resolution,
    rfc4122: bool,
) -> uuid.UUID:
    """Build a UUID with an n_bytes timestamp and the rest random data.

    Args:
        entropy:    Source of the leading 16 - n_bytes bytes.
        n_bytes:    Timestamp width, 1..8.
        ticks:      Time as RFC 4122 ticks (100 ns since 1582-10-15).
        resolution: Duration of one stored unit (timedelta or int ns).
        rfc4122:    Apply the version/variant marker.

    Raises:
        ConfigurationError: unusable n_bytes or resolution.
        GenerationError: the entropy source failed or ran short.
    """
    operation = "custom_timestamped_uuid"
    buffer = bytearray(UUID_SIZE)

    try:
        write_timestamp(buffer, n_bytes, ticks, resolution)
    except ConfigurationError as exc:
        raise ConfigurationError(
            f"{operation}: timestamp failed: {exc.message}",
            context={**exc.context, "step": "timestamp"},
        ) from exc

    try:
        buffer[:UUID_SIZE - n_bytes] = read_full(entropy, UUID_SIZE - n_bytes)
    except EntropyError as exc:
        logger.debug("%s: entropy step failed: %s", operation, exc)
        raise GenerationError(operation, "entropy", exc.reason) from exc
    except Exception as exc:
        logger.debug("%s: entropy step failed: %s", operation, exc)
        raise GenerationError(operation, "entropy", str(exc)) from exc

    if rfc4122:
        apply_format_marker(buffer)

    return uuid.UUID(bytes=bytes(buffer))


def new_timestamped_uuid(
    layout: Optional[TimestampLayout] = None,
    *,
    entropy: Optional[EntropySource] = None,
    clock: Optional[Clock] = None,
) -> uuid.UUID:
    """Generate a COMB identifier for the current time.

    Defaults: 6-byte timestamp at 1/10 ms, marker on, os.urandom,
    system clock.

    Raises:
        GenerationError: the clock or the entropy source failed.
    """
    if layout is None:
        layout = _DEFAULT_LAYOUT
    if entropy is None:
        entropy = _SYSTEM_ENTROPY
    if clock is None:
        clock = uuid_time

    try:
        ticks = clock()
    except Exception as exc:
        logger.debug("new_timestamped_uuid: clock step failed: %s", exc)
        raise GenerationError("new_timestamped_uuid", "clock", str(exc)) from exc

    return custom_timestamped_uuid(
        entropy,
        layout.timestamp_bytes,
        ticks,
        layout.resolution_ns,
        layout.rfc4122,
    )


class CombGenerator:
    """Reusable COMB identifier factory.

    Holds one validated layout plus its clock and entropy source.
    Instances are callable, so they slot into
    `Field(default_factory=...)` the same way a plain function does.

    Args:
        layout:  Timestamp layout (defaults to TimestampLayout()).
        entropy: Entropy source (defaults to os.urandom).
        clock:   Tick clock (defaults to the system clock).
    """

    def __init__(
        self,
        layout: Optional[TimestampLayout] = None,
        entropy: Optional[EntropySource] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.layout = _DEFAULT_LAYOUT if layout is None else layout
        self.entropy = _SYSTEM_ENTROPY if entropy is None else entropy
        self.clock = uuid_time if clock is None else clock
        logger.debug(
            "CombGenerator: %d timestamp bytes at %dns, rfc4122=%s",
            self.layout.timestamp_bytes,
            self.layout.resolution_ns,
            self.layout.rfc4122,
        )

    def generate(self) -> uuid.UUID:
        return new_timestamped_uuid(
            self.layout, entropy=self.entropy, clock=self.clock
        )

    def __call__(self) -> uuid.UUID:
        return self.generate()

    def read(self, id: uuid.UUID) -> int:
        """Stored units held by an identifier made with this layout."""
        return read_custom_timestamp(id, self.layout.timestamp_bytes)
