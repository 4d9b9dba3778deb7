"""
comb_core/nullable.py — Optional identifier for nullable columns.

NullUUID is a tagged option: either it holds a uuid.UUID or it is
absent. Validity is derived from presence and never stored alongside
a value, so an absent identifier cannot be mistaken for the all-zero
UUID.
"""

from __future__ import annotations

import uuid
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import AbsentIdentifierError

DbValue = Union[None, str, bytes, bytearray, memoryview, uuid.UUID]


class NullUUID(BaseModel):
    """A uuid.UUID that may be absent."""

    model_config = ConfigDict(frozen=True)

    value: Optional[uuid.UUID] = None

    @classmethod
    def of(cls, value: uuid.UUID) -> "NullUUID":
        return cls(value=value)

    @classmethod
    def absent(cls) -> "NullUUID":
        return cls()

    @property
    def valid(self) -> bool:
        return self.value is not None

    def unwrap(self) -> uuid.UUID:
        """Return the identifier. Raises AbsentIdentifierError when absent."""
        if self.value is None:
            raise AbsentIdentifierError("NullUUID is absent")
        return self.value

    # -- database adapters --------------------------------------------------

    @classmethod
    def from_db(cls, raw: DbValue) -> "NullUUID":
        """Accept NULL, canonical text, or 16 raw bytes."""
        if raw is None:
            return cls()
        if isinstance(raw, uuid.UUID):
            return cls(value=raw)
        if isinstance(raw, str):
            return cls(value=uuid.UUID(raw))
        data = bytes(raw)
        if len(data) == 16:
            return cls(value=uuid.UUID(bytes=data))
        # Some drivers hand text columns back as bytes.
        return cls(value=uuid.UUID(data.decode("ascii")))

    def to_db(self) -> Optional[str]:
        """Canonical 8-4-4-4-12 text, or None when absent."""
        if self.value is None:
            return None
        return str(self.value)
