"""
Proof Schema Unit Tests
Tests for merkle_allowlist/schemas/proof.py

Tests:
- ProofPayload serialization survives JSON transport and still verifies
- Hex, schema version and hash algorithm validation
- TreeCommitment export
"""
import pytest
from pydantic import ValidationError

from merkle_allowlist.merkle.merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    prove_by_index,
    verify_payload,
)
from merkle_allowlist.schemas.proof import ProofPayload, TreeCommitment

from fixtures.common import make_tree


class TestProofPayload:
    """Tests for ProofPayload."""

    def test_json_transport_verifies(self):
        """A payload sent as JSON verifies on the other side."""
        tree = make_tree(7)
        payload = MerkleProver.payload(tree, 3)

        received = ProofPayload.model_validate_json(payload.model_dump_json())

        assert verify_payload(received)
        assert received.root == tree.hex_root

    def test_from_proof_fields(self):
        tree = make_tree(5)
        proof = prove_by_index(tree, 1)

        payload = ProofPayload.from_proof(proof)

        assert payload.hash_algorithm == "keccak256"
        assert payload.schema_version == "v1"
        assert payload.leaf == "0x" + proof.leaf.hex()
        assert payload.proof == proof.hex_siblings
        assert payload.index == 1

    def test_to_proof(self):
        tree = make_tree(5)
        proof = prove_by_index(tree, 4)

        assert ProofPayload.from_proof(proof).to_proof() == proof

    def test_expected_root_overrides_payload_root(self):
        tree = make_tree(4)
        other = make_tree(6)
        payload = MerkleProver.payload(tree, 0)

        assert verify_payload(payload, expected_root=tree.root)
        assert not verify_payload(payload, expected_root=other.root)
        assert not MerkleVerifier.verify_payload(payload, other.root)

    def test_tampered_payload_fails(self):
        tree = make_tree(4)
        payload = MerkleProver.payload(tree, 2)
        data = payload.model_dump()
        data["proof"][0] = "0x" + "ab" * 32

        assert not verify_payload(ProofPayload(**data))

    def test_sha256_payload(self, sha256_encoder):
        tree = make_tree(5, sha256_encoder)
        payload = MerkleProver.payload(tree, 4)

        assert payload.hash_algorithm == "sha256"
        assert verify_payload(payload)

    def test_hex_normalized_to_lower_case(self):
        tree = make_tree(2)
        payload = MerkleProver.payload(tree, 0)
        data = payload.model_dump()
        data["root"] = data["root"].upper().replace("0X", "0x")

        assert ProofPayload(**data).root == tree.hex_root

    def test_hash_algorithm_normalized(self):
        tree = make_tree(2)
        data = MerkleProver.payload(tree, 0).model_dump()
        data["hash_algorithm"] = "KECCAK256"

        assert ProofPayload(**data).hash_algorithm == "keccak256"

    def test_empty_proof_allowed(self):
        tree = make_tree(1)
        payload = MerkleProver.payload(tree, 0)

        assert payload.proof == []
        assert verify_payload(payload)


class TestProofPayloadValidation:
    """Malformed payloads are rejected at the schema boundary."""

    def _valid(self) -> dict:
        return MerkleProver.payload(make_tree(3), 1).model_dump()

    def test_missing_prefix(self):
        data = self._valid()
        data["leaf"] = data["leaf"][2:]
        with pytest.raises(ValidationError):
            ProofPayload(**data)

    def test_invalid_hex_in_proof(self):
        data = self._valid()
        data["proof"] = ["0xnothex"]
        with pytest.raises(ValidationError):
            ProofPayload(**data)

    def test_unknown_hash_algorithm(self):
        data = self._valid()
        data["hash_algorithm"] = "md5"
        with pytest.raises(ValidationError):
            ProofPayload(**data)

    def test_unsupported_schema_version(self):
        data = self._valid()
        data["schema_version"] = "v2"
        with pytest.raises(ValidationError):
            ProofPayload(**data)

    def test_extra_fields_forbidden(self):
        data = self._valid()
        data["direction_bits"] = [0, 1]
        with pytest.raises(ValidationError):
            ProofPayload(**data)

    def test_negative_index(self):
        data = self._valid()
        data["index"] = -1
        with pytest.raises(ValidationError):
            ProofPayload(**data)

    def test_frozen(self):
        payload = ProofPayload(**self._valid())
        with pytest.raises(ValidationError):
            payload.root = payload.leaf


class TestTreeCommitment:
    """Tests for TreeCommitment."""

    def test_from_tree(self):
        tree = make_tree(5)

        commitment = TreeCommitment.from_tree(tree)

        assert commitment.root == tree.hex_root
        assert commitment.root_bytes == tree.root
        assert commitment.leaf_count == 5
        assert commitment.depth == 3
        assert commitment.hash_algorithm == "keccak256"
        assert commitment.layers is None

    def test_include_layers(self):
        tree = make_tree(3)

        commitment = TreeCommitment.from_tree(tree, include_layers=True)

        assert commitment.layers == tree.hex_layers
        assert commitment.layers[-1] == [tree.hex_root]

    def test_single_leaf_depth_zero(self):
        commitment = TreeCommitment.from_tree(make_tree(1))
        assert commitment.depth == 0

    def test_rejects_zero_leaves(self):
        tree = make_tree(2)
        with pytest.raises(ValidationError):
            TreeCommitment(root=tree.hex_root, leaf_count=0, depth=0)
