"""Merkle tree subsystem: construction, inclusion proofs and verification."""

from fsguard_core.merkle.models import MerkleNode
from fsguard_core.merkle.tree import MerkleTree, combine_digests, verify_proof


def build_tree(blocks, hasher=None) -> MerkleTree:
    """Convenience wrapper: construct a tree and build it over *blocks*."""
    tree = MerkleTree(hasher)
    tree.build(blocks)
    return tree


__all__ = [
    "MerkleNode",
    "MerkleTree",
    "build_tree",
    "combine_digests",
    "verify_proof",
]
