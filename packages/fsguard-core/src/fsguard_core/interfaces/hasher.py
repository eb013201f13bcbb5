"""Hashing capability consumed by the Merkle tree."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Hasher(Protocol):
    """Deterministic map from arbitrary bytes to a fixed-length digest.

    The output length must not vary between calls on the same instance.
    """

    def hash(self, data: bytes) -> bytes: ...
