"""
comb_core/codec.py — Fixed-width big-endian integer codec.

Converts between an unsigned integer and 1..8 bytes at an arbitrary
offset of a buffer, most significant byte first.

Width errors are configuration errors. Offset/width combinations
that do not fit the buffer raise BoundsViolation before anything is
written: the buffer is never truncated, extended or wrapped.
"""

from __future__ import annotations

from .config import MAX_CODEC_WIDTH
from .errors import BoundsViolation, ConfigurationError


def check_width(width: int) -> None:
    if not 1 <= width <= MAX_CODEC_WIDTH:
        raise ConfigurationError(
            f"codec width must be between 1 and {MAX_CODEC_WIDTH} bytes, "
            f"got {width}",
            context={"width": width},
        )


def _check_bounds(size: int, offset: int, width: int) -> None:
    if offset < 0 or offset + width > size:
        raise BoundsViolation(offset, width, size)


def encode_fixed_width(
    buffer: bytearray, offset: int, width: int, value: int
) -> None:
    """Write the low 8*width bits of value into buffer[offset:offset+width].

    Bits of value above 8*width are discarded; that is never an error.

    Raises:
        ConfigurationError: width outside 1..8.
        BoundsViolation: the field does not fit inside buffer.
    """
    check_width(width)
    _check_bounds(len(buffer), offset, width)
    mask = (1 << (width * 8)) - 1
    buffer[offset:offset + width] = (value & mask).to_bytes(width, byteorder="big")


def decode_fixed_width(buffer: bytes | bytearray | memoryview, offset: int, width: int) -> int:
    """Read width big-endian bytes starting at offset as an unsigned int.

    Raises:
        ConfigurationError: width outside 1..8. A wider request is
            rejected rather than masked down to 8 bytes.
        BoundsViolation: the field does not fit inside buffer.
    """
    check_width(width)
    _check_bounds(len(buffer), offset, width)
    return int.from_bytes(bytes(buffer[offset:offset + width]), byteorder="big")
