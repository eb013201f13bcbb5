"""SHA-256 hasher adapter and engine registry."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

from fsguard_core.hashing.fast import sha256_fast
from fsguard_core.hashing.sha256 import DIGEST_SIZE, sha256

EngineName = Literal["reference", "fast"]

ENGINES: dict[str, Callable[[bytes], bytes]] = {
    "reference": sha256,
    "fast": sha256_fast,
}


def get_engine(name: str) -> Callable[[bytes], bytes]:
    """Look up a SHA-256 implementation by name."""
    try:
        return ENGINES[name]
    except KeyError:
        raise ValueError(
            f"Unknown hash engine {name!r}: expected one of {sorted(ENGINES)}"
        ) from None


def digest(data: bytes, engine: EngineName = "fast") -> bytes:
    """SHA-256 of *data* using the selected engine."""
    return get_engine(engine)(data)


class Sha256Hasher:
    """:class:`~fsguard_core.interfaces.Hasher` backed by the in-house SHA-256."""

    name = "sha256"
    digest_size = DIGEST_SIZE

    def __init__(self, engine: EngineName = "fast") -> None:
        self.engine = engine
        self._fn = get_engine(engine)

    def hash(self, data: bytes) -> bytes:
        return self._fn(data)

    def __repr__(self) -> str:
        return f"Sha256Hasher(engine={self.engine!r})"
