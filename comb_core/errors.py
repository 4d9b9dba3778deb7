"""
comb_core/errors.py — Exceptions raised by comb_core.

All exceptions inherit from CombError for unified handling, and also
from the builtin that best describes the failure so callers can catch
ValueError / IndexError / RuntimeError as usual.

Two classes of failure are kept apart:
- BoundsViolation signals caller misuse (a buffer that cannot hold
  the requested field). It is never caught inside the package.
- GenerationError signals an upstream failure (clock, entropy) and
  is an ordinary recoverable error.
"""

from typing import Any, Optional


class CombError(Exception):
    """Base exception for all comb_core errors."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class ConfigurationError(CombError, ValueError):
    """Raised for an unusable width, resolution or layout.

    Always raised before any clock or entropy I/O takes place.
    """


class BoundsViolation(CombError, IndexError):
    """Raised when offset/width do not fit inside the target buffer."""

    def __init__(self, offset: int, width: int, size: int) -> None:
        super().__init__(
            f"field [{offset}:{offset + width}] does not fit in a "
            f"{size}-byte buffer",
            context={"offset": offset, "width": width, "size": size},
        )
        self.offset = offset
        self.width = width
        self.size = size


class GenerationError(CombError, RuntimeError):
    """Raised when identifier generation fails at a given step.

    `operation` is the public entry point, `step` is one of
    "clock", "timestamp" or "entropy".
    """

    def __init__(self, operation: str, step: str, reason: str) -> None:
        super().__init__(
            f"{operation}: {step} failed: {reason}",
            context={"step": step},
        )
        self.operation = operation
        self.step = step
        self.reason = reason


class EntropyError(GenerationError):
    """Raised when an entropy source returns fewer bytes than requested."""

    def __init__(self, requested: int, received: int) -> None:
        super().__init__(
            "read_full",
            "entropy",
            f"short read: wanted {requested} bytes, got {received}",
        )
        self.requested = requested
        self.received = received


class AbsentIdentifierError(CombError, ValueError):
    """Raised when the value of an absent NullUUID is requested."""
