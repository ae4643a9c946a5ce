"""
Merkle Proofs
Inclusion proof generation against a built tree, and tree-independent
verification.

This module provides:
- MerkleProof: Dataclass representing an inclusion proof
- prove_by_index / prove_by_digest: walk the recorded layers
- verify_proof: recompute the root from leaf + siblings
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Proof Rules (must mirror merkle_tree.py):
1. At each level below the root, the sibling is layer[position ^ 1]
2. A carried-forward odd node has no sibling; nothing is emitted
3. No direction bits: combine_sorted makes left/right irrelevant
4. Verification folds combine_sorted over the siblings in order

The verifier only needs the leaf digest, the siblings, the expected root
and the hasher, so it can run in a separate process or trust domain.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from merkle_allowlist.crypto.hashing import KECCAK256, Hasher, get_hasher, to_hex
from merkle_allowlist.merkle.leaf import Entry, LeafEncoder
from merkle_allowlist.merkle.merkle_tree import MerkleTree, build_tree
from merkle_allowlist.schemas.errors import IndexOutOfRangeError, MalformedDigestError
from merkle_allowlist.schemas.proof import ProofPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Only siblings travels to the verifier as "the proof"; leaf and root
    are carried alongside for convenience.

    Attributes:
        leaf: The leaf digest being proven
        siblings: Sibling digests from bottom to top
        root: The root this proof was generated against
        index: Position of the leaf in level 0, if known
    """
    leaf: bytes
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = b""
    index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.index is not None and self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    @property
    def hex_siblings(self) -> list[str]:
        return [to_hex(sibling) for sibling in self.siblings]

    def __len__(self) -> int:
        return len(self.siblings)


def prove_by_index(tree: MerkleTree, leaf_index: int) -> MerkleProof:
    """
    Generate the inclusion proof for the leaf at leaf_index.

    Algorithm:
    1. position = leaf_index at level 0
    2. For each level below the root:
       - sibling = position ^ 1
       - if sibling exists in the layer, append it
         (otherwise the node was carried forward: append nothing)
       - position = position // 2

    Raises:
        IndexOutOfRangeError: If leaf_index is negative or >= leaf count
    """
    leaf_count = tree.leaf_count
    if isinstance(leaf_index, bool) or leaf_index < 0 or leaf_index >= leaf_count:
        raise IndexOutOfRangeError(
            f"Leaf index {leaf_index} out of range for {leaf_count} leaves",
            index=leaf_index,
            size=leaf_count,
        )

    siblings: list[bytes] = []
    position = leaf_index
    for layer in tree.layers[:-1]:
        sibling = position ^ 1
        if sibling < len(layer):
            siblings.append(layer[sibling])
        position //= 2

    logger.debug(
        "Generated proof for leaf %d: %d siblings", leaf_index, len(siblings)
    )
    return MerkleProof(
        leaf=tree.leaves[leaf_index],
        siblings=siblings,
        root=tree.root,
        index=leaf_index,
    )


def prove_by_digest(tree: MerkleTree, leaf: bytes) -> MerkleProof:
    """
    Generate the inclusion proof for a leaf digest.

    Duplicate digests resolve to the first occurrence.

    Raises:
        NotFoundError: If leaf is not in level 0 of the tree
    """
    return prove_by_index(tree, tree.leaf_index(leaf))


def get_hex_proof(tree: MerkleTree, leaf: Union[int, bytes]) -> list[str]:
    """
    Serialized proof (0x hex siblings) for a leaf index or leaf digest.

    This is the list an on-chain verifier takes as its bytes32[] argument.
    """
    if isinstance(leaf, int) and not isinstance(leaf, bool):
        proof = prove_by_index(tree, leaf)
    else:
        proof = prove_by_digest(tree, leaf)
    return proof.hex_siblings


def _check_width(name: str, digest: bytes, hasher: Hasher) -> None:
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != hasher.digest_size:
        actual = len(digest) if isinstance(digest, (bytes, bytearray)) else None
        raise MalformedDigestError(
            f"{name} must be a {hasher.digest_size}-byte digest",
            expected=hasher.digest_size,
            actual=actual,
        )


def verify_proof(
    leaf: bytes,
    siblings: Sequence[bytes],
    expected_root: bytes,
    hasher: Hasher = KECCAK256,
) -> bool:
    """
    Verify that leaf is included under expected_root.

    Algorithm:
    1. current = leaf
    2. For each sibling in order: current = combine_sorted(current, sibling)
    3. Return current == expected_root

    Args:
        leaf: Leaf digest being claimed
        siblings: Proof siblings, bottom-up
        expected_root: Trusted root
        hasher: Must be the hasher the tree was built with

    Returns:
        True if the recomputed root matches, False otherwise

    Raises:
        MalformedDigestError: If any input digest has the wrong width
    """
    _check_width("Leaf", leaf, hasher)
    _check_width("Root", expected_root, hasher)
    for position, sibling in enumerate(siblings):
        _check_width(f"Proof element {position}", sibling, hasher)

    current = bytes(leaf)
    for sibling in siblings:
        current = hasher.combine_sorted(current, bytes(sibling))

    return current == bytes(expected_root)


def verify_merkle_proof(proof: MerkleProof, hasher: Hasher = KECCAK256) -> bool:
    """Verify a MerkleProof against the root it carries."""
    return verify_proof(proof.leaf, proof.siblings, proof.root, hasher)


def verify_payload(
    payload: ProofPayload,
    expected_root: Optional[bytes] = None,
) -> bool:
    """
    Verify a serialized proof.

    The hasher is resolved from payload.hash_algorithm. When expected_root is
    given it is used instead of the root carried in the payload, which is
    what a verifier holding the published root should do.
    """
    hasher = get_hasher(payload.hash_algorithm)
    proof = payload.to_proof()
    root = proof.root if expected_root is None else expected_root
    return verify_proof(proof.leaf, proof.siblings, root, hasher)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> tree = MerkleProver.build(entries)
        >>> proof = MerkleProver.prove(tree, 1)
        >>> MerkleVerifier.verify(proof, tree.hasher)
        True
    """

    @staticmethod
    def build(
        entries: Sequence[Entry],
        encoder: Optional[LeafEncoder] = None,
    ) -> MerkleTree:
        """Build a tree over entries with the given or default encoder."""
        return build_tree(entries, encoder=encoder)

    @staticmethod
    def prove(tree: MerkleTree, index: int) -> MerkleProof:
        """Proof for the leaf at index."""
        return prove_by_index(tree, index)

    @staticmethod
    def prove_digest(tree: MerkleTree, leaf: bytes) -> MerkleProof:
        """Proof for a leaf digest."""
        return prove_by_digest(tree, leaf)

    @staticmethod
    def prove_entry(tree: MerkleTree, entry: Entry, encoder: LeafEncoder) -> MerkleProof:
        """
        Proof for an entry, located by its leaf digest.

        The encoder must be the one the tree was built with.

        Raises:
            NotFoundError: If the entry is not committed in the tree
        """
        return prove_by_digest(tree, encoder.leaf_digest(entry.identity, entry.index))

    @staticmethod
    def payload(tree: MerkleTree, index: int) -> ProofPayload:
        """Serialized proof for the leaf at index."""
        return ProofPayload.from_proof(prove_by_index(tree, index), tree.hasher.name)

    @staticmethod
    def compute_root(
        leaves: Sequence[bytes],
        hasher: Hasher = KECCAK256,
    ) -> bytes:
        """Root of a tree over pre-hashed leaves."""
        return MerkleTree.from_leaves(leaves, hasher).root


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Holds no tree state; every method needs only digests and a hasher.
    """

    @staticmethod
    def verify(proof: MerkleProof, hasher: Hasher = KECCAK256) -> bool:
        return verify_merkle_proof(proof, hasher)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
        hasher: Hasher = KECCAK256,
    ) -> bool:
        return verify_proof(leaf, siblings, root, hasher)

    @staticmethod
    def verify_entry_in_root(
        entry: Entry,
        siblings: Sequence[bytes],
        root: bytes,
        encoder: LeafEncoder,
    ) -> bool:
        """
        Verify an entry is included in a root.

        The leaf is rebuilt from the entry, the way an on-chain verifier
        rebuilds it from msg.sender and the claimed index.
        """
        leaf = encoder.leaf_digest(entry.identity, entry.index)
        return verify_proof(leaf, siblings, root, encoder.hasher)

    @staticmethod
    def verify_payload(
        payload: ProofPayload,
        expected_root: Optional[bytes] = None,
    ) -> bool:
        return verify_payload(payload, expected_root)


__all__ = [
    "MerkleProof",
    "prove_by_index",
    "prove_by_digest",
    "get_hex_proof",
    "verify_proof",
    "verify_merkle_proof",
    "verify_payload",
    "MerkleProver",
    "MerkleVerifier",
]
