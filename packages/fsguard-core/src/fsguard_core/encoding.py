"""Hex rendering for digests and proofs."""

from __future__ import annotations

from collections.abc import Iterable


def bytes_to_hex(data: bytes) -> str:
    return bytes(data).hex()


def hex_to_bytes(text: str) -> bytes:
    """Parse a hex string, tolerating a ``0x`` prefix and surrounding whitespace."""
    cleaned = text.strip()
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError as e:
        raise ValueError(f"Invalid hex string {text!r}: {e}") from e


def proof_to_hex(proof: Iterable[bytes]) -> list[str]:
    return [bytes_to_hex(item) for item in proof]


def proof_from_hex(items: Iterable[str]) -> list[bytes]:
    return [hex_to_bytes(item) for item in items]
