"""
comb_core/layout.py — Generator configuration.

A TimestampLayout fixes how many trailing bytes hold the timestamp,
what one stored unit is worth, and whether the version/variant marker
is stamped. It is validated once, at construction, so the generation
hot path never re-checks it.

Note: with timestamp_bytes == 8 the timestamp region starts at byte 8,
so an enabled marker overwrites its top three bits.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import (
    DEFAULT_RESOLUTION_NS,
    DEFAULT_TIMESTAMP_BYTES,
    MAX_CODEC_WIDTH,
    UUID_SIZE,
)
from .errors import ConfigurationError
from .timerange import TimeRange, time_range
from .timestamp import Resolution, resolution_to_ns


class TimestampLayout(BaseModel):
    """Width, resolution and marker settings for COMB identifiers."""

    model_config = ConfigDict(frozen=True)

    timestamp_bytes: int = Field(
        default=DEFAULT_TIMESTAMP_BYTES,
        ge=1,
        le=MAX_CODEC_WIDTH,
        description="Trailing bytes holding the timestamp.",
    )
    resolution_ns: int = Field(
        default=DEFAULT_RESOLUTION_NS,
        gt=0,
        description="Duration of one stored unit, in nanoseconds.",
    )
    rfc4122: bool = Field(
        default=True,
        description="Stamp version 6 / variant 0b111 marker bits.",
    )

    @classmethod
    def build(
        cls,
        timestamp_bytes: int = DEFAULT_TIMESTAMP_BYTES,
        resolution: Resolution = DEFAULT_RESOLUTION_NS,
        rfc4122: bool = True,
    ) -> "TimestampLayout":
        """Construct a layout, reporting any problem as ConfigurationError.

        `resolution` may be a timedelta or int nanoseconds.
        """
        try:
            return cls(
                timestamp_bytes=timestamp_bytes,
                resolution_ns=resolution_to_ns(resolution),
                rfc4122=rfc4122,
            )
        except ValidationError as exc:
            raise ConfigurationError(
                f"invalid timestamp layout: {exc.errors()[0]['msg']}",
                context={
                    "timestamp_bytes": timestamp_bytes,
                    "resolution": resolution,
                },
            ) from exc

    @property
    def random_bytes(self) -> int:
        return UUID_SIZE - self.timestamp_bytes

    @property
    def timestamp_bits(self) -> int:
        return self.timestamp_bytes * 8

    def time_range(self) -> TimeRange:
        """Span covered before the timestamp wraps."""
        return time_range(self.timestamp_bits, self.resolution_ns)
