"""Binary Merkle tree with inclusion proofs.

Parent digests are computed over the two child digests in canonical order
(lexicographically smaller first), so a proof is just a list of sibling
digests with no left/right markers. A level with an odd number of nodes
pairs its last node with itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from fsguard_core.errors import DigestLengthError
from fsguard_core.hashing import Sha256Hasher
from fsguard_core.interfaces import Hasher
from fsguard_core.merkle.models import MerkleNode

logger = logging.getLogger(__name__)


def combine_digests(hasher: Hasher, a: bytes, b: bytes) -> bytes:
    """Hash two child digests concatenated in canonical order."""
    first, second = (a, b) if a <= b else (b, a)
    return hasher.hash(first + second)


def _as_bytes(block: object) -> bytes:
    # bytes(3) would silently produce three zero bytes
    if not isinstance(block, (bytes, bytearray, memoryview)):
        raise TypeError(f"Merkle blocks must be bytes-like, got {type(block).__name__}")
    return bytes(block)


def _check_lengths(nodes: list[MerkleNode], width: int) -> None:
    for node in nodes:
        if len(node.digest) != width:
            raise DigestLengthError(width, len(node.digest))


def verify_proof(
    leaf_data: bytes,
    proof: Sequence[bytes],
    expected_root: bytes,
    hasher: Hasher | None = None,
) -> bool:
    """Recompute a root from *leaf_data* and *proof* and compare it to *expected_root*.

    Works without a tree instance, so an independent party holding only the
    trusted root can check a proof. Returns ``False`` on any mismatch.
    """
    hasher = hasher if hasher is not None else Sha256Hasher()
    current = hasher.hash(bytes(leaf_data))
    logger.debug("verify: leaf=%s", current.hex())

    for level, item in enumerate(proof):
        sibling = bytes(item)
        current = combine_digests(hasher, current, sibling)
        logger.debug("verify: level=%d sibling=%s -> %s", level, sibling.hex(), current.hex())

    expected = bytes(expected_root)
    valid = current == expected
    logger.debug("verify: computed=%s expected=%s valid=%s", current.hex(), expected.hex(), valid)
    return valid


class MerkleTree:
    """Merkle tree over an ordered list of data blocks."""

    def __init__(self, hasher: Hasher | None = None) -> None:
        self.hasher: Hasher = hasher if hasher is not None else Sha256Hasher()
        self._levels: list[list[MerkleNode]] = []
        self._root: MerkleNode | None = None
        self._built = False

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self, blocks: Iterable[bytes]) -> None:
        """Replace the tree with one built over *blocks*, in order.

        An empty input leaves the tree without a root. Raises
        :class:`TypeError` for a block that is not bytes-like and
        :class:`DigestLengthError` if the hasher's output length varies;
        either way the previous tree is kept.
        """
        leaves = [MerkleNode(digest=self.hasher.hash(_as_bytes(block))) for block in blocks]
        width = len(leaves[0].digest) if leaves else 0
        _check_lengths(leaves, width)

        levels: list[list[MerkleNode]] = [leaves] if leaves else []
        current = leaves
        while len(current) > 1:
            current = self._next_level(current)
            _check_lengths(current, width)
            levels.append(current)

        self._levels = levels
        self._root = current[0] if current else None
        self._built = True
        logger.debug(
            "Built merkle tree: %d leaves, depth %d, root=%s",
            len(leaves),
            self.depth,
            self._root.digest.hex() if self._root else None,
        )

    def _next_level(self, nodes: list[MerkleNode]) -> list[MerkleNode]:
        parents: list[MerkleNode] = []
        for i in range(0, len(nodes), 2):
            left = nodes[i]
            # Duplicate the last node if the level is odd
            right = nodes[i + 1] if i + 1 < len(nodes) else left
            parents.append(
                MerkleNode(
                    digest=combine_digests(self.hasher, left.digest, right.digest),
                    left=left,
                    right=right,
                )
            )
        return parents

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def root(self) -> bytes | None:
        """Root digest, or ``None`` if the tree holds no blocks."""
        return self._root.digest if self._root is not None else None

    @property
    def root_node(self) -> MerkleNode | None:
        return self._root

    @property
    def is_built(self) -> bool:
        return self._built

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return tuple(node.digest for node in self._levels[0]) if self._levels else ()

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0]) if self._levels else 0

    @property
    def levels(self) -> tuple[tuple[bytes, ...], ...]:
        """Digests of every level, leaves first and root last."""
        return tuple(tuple(node.digest for node in level) for level in self._levels)

    @property
    def depth(self) -> int:
        """Number of levels above the leaves."""
        return max(len(self._levels) - 1, 0)

    def __len__(self) -> int:
        return self.leaf_count

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def generate_proof(self, index: int) -> list[bytes] | None:
        """Sibling digests from leaf *index* up to the root.

        Returns ``None`` when *index* is out of range, including on an empty
        tree. A single-leaf tree yields an empty proof.
        """
        if index < 0 or index >= self.leaf_count:
            logger.debug("No proof for index %d (leaf count %d)", index, self.leaf_count)
            return None

        proof: list[bytes] = []
        current_index = index
        for depth, level in enumerate(self._levels[:-1]):
            if current_index % 2 == 0:
                sibling_index = current_index + 1
            else:
                sibling_index = current_index - 1
            if sibling_index >= len(level):
                sibling_index = current_index  # odd tail pairs with itself

            sibling = level[sibling_index].digest
            logger.debug(
                "proof: level=%d index=%d sibling=%d digest=%s",
                depth,
                current_index,
                sibling_index,
                sibling.hex(),
            )
            proof.append(sibling)
            current_index //= 2

        return proof

    def verify_proof(
        self, leaf_data: bytes, proof: Sequence[bytes], expected_root: bytes
    ) -> bool:
        """Check *proof* for *leaf_data* against *expected_root* with this tree's hasher."""
        return verify_proof(leaf_data, proof, expected_root, hasher=self.hasher)
