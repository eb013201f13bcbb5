"""Exception hierarchy for fsguard."""

from __future__ import annotations


class FsGuardError(Exception):
    """Base class for fsguard errors."""


class DigestLengthError(FsGuardError, ValueError):
    """A hasher returned digests of differing lengths."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"hasher returned a {got}-byte digest, expected {expected} bytes")


class IngestError(FsGuardError):
    """Input path could not be turned into data blocks."""
