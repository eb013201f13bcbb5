"""From-scratch SHA-256 hash engine."""

from fsguard_core.hashing.fast import sha256_fast
from fsguard_core.hashing.hasher import ENGINES, Sha256Hasher, digest, get_engine
from fsguard_core.hashing.sha256 import (
    BLOCK_SIZE,
    DIGEST_SIZE,
    INITIAL_STATE,
    ROUND_CONSTANTS,
    compress,
    message_schedule,
    pad_message,
    sha256,
)

__all__ = [
    "BLOCK_SIZE",
    "DIGEST_SIZE",
    "ENGINES",
    "INITIAL_STATE",
    "ROUND_CONSTANTS",
    "Sha256Hasher",
    "compress",
    "digest",
    "get_engine",
    "message_schedule",
    "pad_message",
    "sha256",
    "sha256_fast",
]
