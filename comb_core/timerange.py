"""
comb_core/timerange.py — How long a timestamp field lasts before wrapping.

Reporting helper only; nothing in encoding or decoding depends on it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .config import AVG_YEAR_DAYS, SECONDS_PER_DAY
from .errors import ConfigurationError
from .timestamp import Resolution, resolution_to_ns


class TimeRange(BaseModel):
    """Wall-clock span of a word_size_bits counter at a given resolution."""

    word_size_bits: int = Field(..., ge=1)
    resolution_ns: int = Field(..., gt=0)
    years: int = Field(..., ge=0)
    days: int = Field(..., ge=0, description="Days beyond whole years.")
    seconds: float = Field(..., ge=0, description="Seconds beyond whole days.")
    total_seconds: float = Field(..., ge=0)

    def __str__(self) -> str:
        return f"{self.years} years {self.days} days {self.seconds:f} seconds"


def time_range(word_size_bits: int, resolution: Resolution) -> TimeRange:
    """Span covered by 2**word_size_bits units of `resolution`.

    Uses 86400 s/day and a 365.24219-day mean tropical year.
    """
    if word_size_bits < 1:
        raise ConfigurationError(
            f"word size must be at least 1 bit, got {word_size_bits}",
            context={"word_size_bits": word_size_bits},
        )
    resolution_ns = resolution_to_ns(resolution)
    total_ns = (1 << word_size_bits) * resolution_ns

    whole_seconds, ns_rmn = divmod(total_ns, 1_000_000_000)
    days, seconds_rmn = divmod(whole_seconds, SECONDS_PER_DAY)

    fractional_years = days / AVG_YEAR_DAYS
    years = int(fractional_years)
    days_rmn = int((fractional_years - years) * AVG_YEAR_DAYS)

    return TimeRange(
        word_size_bits=word_size_bits,
        resolution_ns=resolution_ns,
        years=years,
        days=days_rmn,
        seconds=seconds_rmn + ns_rmn / 1_000_000_000,
        total_seconds=total_ns / 1_000_000_000,
    )
