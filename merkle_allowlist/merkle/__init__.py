"""
Merkle Tree and Commitments
Sorted-pair Merkle tree construction + proof generation/verification.

Canonical Commitment Rules:
1. Leaf: hash(identity + index as fixed-width big-endian)
2. Parent: hash(min(left, right) + max(left, right))
3. Odd layer: carry the last node forward unchanged
4. Empty input: EmptyInputError
5. Single leaf: root = leaf, empty proof

Usage:
    from merkle_allowlist.merkle import (
        build_tree, entries_from_addresses, prove_by_index, verify_proof,
    )

    tree = build_tree(entries_from_addresses(addresses))
    proof = prove_by_index(tree, 1)
    assert verify_proof(proof.leaf, proof.siblings, tree.root, tree.hasher)
"""
from .leaf import (
    DEFAULT_IDENTITY_WIDTH,
    DEFAULT_INDEX_WIDTH,
    Entry,
    LeafEncoder,
    entries_from_addresses,
)

from .merkle_tree import (
    MerkleTree,
    build_tree,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    get_hex_proof,
    prove_by_digest,
    prove_by_index,
    verify_merkle_proof,
    verify_payload,
    verify_proof,
)


__all__ = [
    # Leaves
    "DEFAULT_IDENTITY_WIDTH",
    "DEFAULT_INDEX_WIDTH",
    "Entry",
    "LeafEncoder",
    "entries_from_addresses",
    # Tree
    "MerkleTree",
    "build_tree",
    "compute_tree_depth",
    # Proofs
    "MerkleProof",
    "prove_by_index",
    "prove_by_digest",
    "get_hex_proof",
    "verify_proof",
    "verify_merkle_proof",
    "verify_payload",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
