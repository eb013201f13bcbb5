"""Plugin interfaces for fsguard extensions."""

from fsguard_core.interfaces.hasher import Hasher

__all__ = [
    "Hasher",
]
