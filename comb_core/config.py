"""
comb_core/config.py — Fixed constants for COMB identifier layout.

All configuration here is immutable and defined at module level.
Per-generator settings live on TimestampLayout (layout.py).
"""

from typing import Final

# Identifier container: one RFC 4122 sized UUID.
UUID_SIZE: Final[int] = 16

# The codec returns Python ints but mirrors a 64-bit word: 8 bytes maximum.
MAX_CODEC_WIDTH: Final[int] = 8

# 6 bytes at 1/10 ms covers roughly 892 years before wrapping.
DEFAULT_TIMESTAMP_BYTES: Final[int] = 6
DEFAULT_RESOLUTION_NS: Final[int] = 100_000

# Raw clock unit: 100 ns ticks since 15 Oct 1582 (RFC 4122 time).
TICK_NS: Final[int] = 100
TICKS_PER_SECOND: Final[int] = 1_000_000_000 // TICK_NS

# Ticks between 1582-10-15 and 1970-01-01.
GREGORIAN_UNIX_OFFSET_TICKS: Final[int] = 0x01B21DD213814000

# Format marker: version 6, variant 0b111 (reserved for future definition).
VERSION_BYTE: Final[int] = 6
VERSION_MASK: Final[int] = 0x0F
VERSION_BITS: Final[int] = 0x60
VARIANT_BYTE: Final[int] = 8
VARIANT_MASK: Final[int] = 0x3F
VARIANT_BITS: Final[int] = 0xE0

# Time-range reporting.
SECONDS_PER_DAY: Final[int] = 86_400
AVG_YEAR_DAYS: Final[float] = 365.24219
