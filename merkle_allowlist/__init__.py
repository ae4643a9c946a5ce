"""
merkle-allowlist

Tamper-evident Merkle commitments over a fixed allowlist of
(identity, index) entries, with short inclusion proofs that an external
verifier (e.g. a Solidity contract using sorted-pair keccak256) can check.
"""

__version__ = "0.1.0"

from .schemas.errors import (
    AllowlistException,
    EmptyInputError,
    EncodingError,
    IndexOutOfRangeError,
    MalformedDigestError,
    NotFoundError,
    UnsupportedHashAlgorithmError,
)
from .crypto.hashing import KECCAK256, SHA256, Hasher, get_hasher
from .merkle import (
    Entry,
    LeafEncoder,
    MerkleProof,
    MerkleTree,
    build_tree,
    entries_from_addresses,
    get_hex_proof,
    prove_by_digest,
    prove_by_index,
    verify_proof,
)
from .schemas.proof import ProofPayload, TreeCommitment
from .config import RuntimeConfig

__all__ = [
    "__version__",
    "AllowlistException",
    "EmptyInputError",
    "EncodingError",
    "IndexOutOfRangeError",
    "MalformedDigestError",
    "NotFoundError",
    "UnsupportedHashAlgorithmError",
    "KECCAK256",
    "SHA256",
    "Hasher",
    "get_hasher",
    "Entry",
    "LeafEncoder",
    "MerkleProof",
    "MerkleTree",
    "build_tree",
    "entries_from_addresses",
    "get_hex_proof",
    "prove_by_digest",
    "prove_by_index",
    "verify_proof",
    "ProofPayload",
    "TreeCommitment",
    "RuntimeConfig",
]
