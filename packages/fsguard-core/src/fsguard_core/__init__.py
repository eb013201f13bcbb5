"""fsguard core - SHA-256 hash engine and Merkle tree with inclusion proofs."""

from fsguard_core.hashing import Sha256Hasher, digest, sha256, sha256_fast
from fsguard_core.interfaces import Hasher
from fsguard_core.merkle import MerkleNode, MerkleTree, build_tree, verify_proof
from fsguard_core.config import FsGuardConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "FsGuardConfig",
    "Hasher",
    "MerkleNode",
    "MerkleTree",
    "Sha256Hasher",
    "build_tree",
    "digest",
    "load_config",
    "sha256",
    "sha256_fast",
    "verify_proof",
]
