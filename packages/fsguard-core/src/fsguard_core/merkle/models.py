"""Data models for the Merkle tree subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MerkleNode:
    """A vertex of the tree: a leaf (no children) or an internal node (two)."""

    digest: bytes
    left: MerkleNode | None = None
    right: MerkleNode | None = None

    def __post_init__(self) -> None:
        if (self.left is None) != (self.right is None):
            raise ValueError("MerkleNode must have either both children or none")

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None
