"""
Schemas & Errors
File: proof.py

Purpose: Transport schemas for published roots and serialized proofs.
All digests travel as 0x-prefixed hex strings; proofs carry no index or
direction bits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from merkle_allowlist.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    from_hex,
    get_hasher,
    to_hex,
)

from .versioning import SCHEMA_VERSION, assert_supported_schema_version

if TYPE_CHECKING:
    from merkle_allowlist.merkle.merkle_proofs import MerkleProof
    from merkle_allowlist.merkle.merkle_tree import MerkleTree


def _validate_hex_digest(value: str) -> str:
    # Raises ValueError, which pydantic reports as a validation error
    from_hex(value)
    return value.lower()


class ProofPayload(BaseModel):
    """
    Serialized inclusion proof for one entry.

    This is what an API hands to a claimant, and what the claimant passes
    on to the verifying contract (proof as bytes32[]).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="Hash used for leaves and pair combination",
    )
    leaf: str = Field(..., description="Leaf digest (0x hex)")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom-up (0x hex)",
    )
    root: str = Field(..., description="Root the proof was generated against (0x hex)")
    index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Leaf position in the tree, informational only",
    )

    @field_validator("schema_version")
    @classmethod
    def _check_schema_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("hash_algorithm")
    @classmethod
    def _check_hash_algorithm(cls, v: str) -> str:
        return get_hasher(v).name

    @field_validator("leaf", "root")
    @classmethod
    def _check_digest(cls, v: str) -> str:
        return _validate_hex_digest(v)

    @field_validator("proof")
    @classmethod
    def _check_proof(cls, v: list[str]) -> list[str]:
        return [_validate_hex_digest(item) for item in v]

    @classmethod
    def from_proof(
        cls,
        proof: "MerkleProof",
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> "ProofPayload":
        return cls(
            hash_algorithm=hash_algorithm,
            leaf=to_hex(proof.leaf),
            proof=[to_hex(sibling) for sibling in proof.siblings],
            root=to_hex(proof.root),
            index=proof.index,
        )

    def to_proof(self) -> "MerkleProof":
        from merkle_allowlist.merkle.merkle_proofs import MerkleProof
        return MerkleProof(
            leaf=from_hex(self.leaf),
            siblings=[from_hex(item) for item in self.proof],
            root=from_hex(self.root),
            index=self.index,
        )


class TreeCommitment(BaseModel):
    """
    Published commitment for a built tree.

    The root is the only value a verifier has to trust; the remaining
    fields document how it was computed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(default=DEFAULT_HASH_ALGORITHM)
    root: str = Field(..., description="Root digest (0x hex)")
    leaf_count: int = Field(..., ge=1)
    depth: int = Field(..., ge=0, description="Combination levels above the leaves")
    layers: Optional[list[list[str]]] = Field(
        default=None,
        description="All layers, leaves first (0x hex), when exported",
    )

    @field_validator("schema_version")
    @classmethod
    def _check_schema_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("hash_algorithm")
    @classmethod
    def _check_hash_algorithm(cls, v: str) -> str:
        return get_hasher(v).name

    @field_validator("root")
    @classmethod
    def _check_root(cls, v: str) -> str:
        return _validate_hex_digest(v)

    @classmethod
    def from_tree(cls, tree: "MerkleTree", include_layers: bool = False) -> "TreeCommitment":
        return cls(
            hash_algorithm=tree.hasher.name,
            root=tree.hex_root,
            leaf_count=tree.leaf_count,
            depth=tree.depth,
            layers=tree.hex_layers if include_layers else None,
        )

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)


__all__ = [
    "ProofPayload",
    "TreeCommitment",
]
