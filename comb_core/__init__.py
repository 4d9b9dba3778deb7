"""
comb_core — Timestamped random (COMB) identifiers.

A COMB identifier is a 16-byte UUID whose trailing bytes hold a
fixed-point timestamp and whose leading bytes are random, so that
identifiers generated later sort after earlier ones on the timestamp
bytes while staying unguessable.

__version__ is the package version.
"""

__version__ = "0.1.0"

from .errors import (
    CombError,
    ConfigurationError,
    BoundsViolation,
    GenerationError,
    EntropyError,
    AbsentIdentifierError,
)
from .codec import encode_fixed_width, decode_fixed_width
from .timestamp import (
    Resolution,
    resolution_to_ns,
    ticks_per_unit,
    to_stored_units,
    read_timestamp,
    read_custom_timestamp,
    write_timestamp,
    uuid_time_to_datetime,
    datetime_to_uuid_time,
    stored_units_to_datetime,
)
from .clock import uuid_time
from .entropy import SystemEntropy, ChaCha20Entropy, read_full
from .layout import TimestampLayout
from .timerange import TimeRange, time_range
from .generator import (
    apply_format_marker,
    custom_timestamped_uuid,
    new_timestamped_uuid,
    CombGenerator,
)
from .nullable import NullUUID
