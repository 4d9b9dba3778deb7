"""
comb_core/entropy.py — Entropy sources for the random region.

A source is any object with read(k) -> bytes. read_full() insists on
exactly k bytes: a source that runs dry is a hard failure, never
padded or retried.

SystemEntropy is the default (os.urandom). ChaCha20Entropy produces a
reproducible keystream from the `cryptography` library, for seeded
CLI runs and test fixtures. No custom crypto.
"""

from __future__ import annotations

import hashlib
import os
import threading
from typing import Protocol

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from .errors import EntropyError


class EntropySource(Protocol):
    def read(self, size: int) -> bytes: ...


class SystemEntropy:
    """Operating-system CSPRNG. Safe to share between threads."""

    def read(self, size: int) -> bytes:
        return os.urandom(size)


class ChaCha20Entropy:
    """Deterministic ChaCha20 keystream.

    Args:
        key:   32-byte ChaCha20 key.
        nonce: 16-byte initial counter + nonce block (cryptography's
               ChaCha20 layout). Defaults to all zeros.

    The keystream position is shared state, guarded by a lock, so one
    instance may be used from several threads; the interleaving of
    reads between threads is then not reproducible.
    """

    def __init__(self, key: bytes, nonce: bytes = bytes(16)) -> None:
        cipher = Cipher(algorithms.ChaCha20(key, nonce), mode=None)
        self._encryptor = cipher.encryptor()
        self._lock = threading.Lock()

    @classmethod
    def from_seed(cls, seed: bytes) -> "ChaCha20Entropy":
        """Derive the key as SHA-256(seed)."""
        return cls(hashlib.sha256(seed).digest())

    def read(self, size: int) -> bytes:
        with self._lock:
            return self._encryptor.update(bytes(size))


def read_full(source: EntropySource, size: int) -> bytes:
    """Read exactly `size` bytes from source.

    Partial reads are continued; an empty read before `size` bytes have
    arrived raises EntropyError.
    """
    chunks = []
    received = 0
    while received < size:
        chunk = source.read(size - received)
        if not chunk:
            raise EntropyError(size, received)
        chunks.append(chunk)
        received += len(chunk)
    return b"".join(chunks)[:size]
