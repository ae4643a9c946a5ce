"""
Hashing Unit Tests
Tests for merkle_allowlist/crypto/hashing.py

Tests:
- keccak256 / sha256 known values
- combine_sorted symmetry and byte ordering
- hasher registry
- to_hex/from_hex
"""
import hashlib

import pytest

from merkle_allowlist.crypto.hashing import (
    KECCAK256,
    SHA256,
    Hasher,
    from_hex,
    get_hasher,
    keccak256,
    sha256,
    supported_hash_algorithms,
    to_hex,
)
from merkle_allowlist.schemas.errors import UnsupportedHashAlgorithmError


KECCAK_EMPTY = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
SHA256_EMPTY = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class TestDigestFunctions:
    """Tests for keccak256() and sha256()."""

    def test_keccak256_empty_known_value(self):
        """keccak256(b"") matches the Ethereum empty-input hash."""
        assert keccak256(b"").hex() == KECCAK_EMPTY

    def test_keccak256_is_not_nist_sha3(self):
        """Ethereum keccak differs from hashlib's SHA3-256 padding."""
        assert keccak256(b"") != hashlib.sha3_256(b"").digest()

    def test_sha256_empty_known_value(self):
        assert sha256(b"").hex() == SHA256_EMPTY

    def test_sha256_matches_hashlib(self):
        assert sha256(b"hello") == hashlib.sha256(b"hello").digest()

    def test_digest_width(self):
        assert len(keccak256(b"abc")) == 32
        assert len(sha256(b"abc")) == 32

    def test_hasher_hash_delegates(self):
        assert KECCAK256.hash(b"data") == keccak256(b"data")
        assert SHA256.hash(b"data") == sha256(b"data")


class TestCombineSorted:
    """Tests for Hasher.combine_sorted()."""

    def test_symmetric(self):
        """combine_sorted(a, b) == combine_sorted(b, a)."""
        a = keccak256(b"a")
        b = keccak256(b"b")

        assert KECCAK256.combine_sorted(a, b) == KECCAK256.combine_sorted(b, a)

    def test_hashes_min_then_max(self):
        a = keccak256(b"a")
        b = keccak256(b"b")
        low, high = sorted([a, b])

        assert KECCAK256.combine_sorted(a, b) == keccak256(low + high)

    def test_big_endian_unsigned_ordering(self):
        """A leading 0x00 byte sorts before 0x01 regardless of the tail."""
        small = b"\x00" + b"\xff" * 31
        large = b"\x01" + b"\x00" * 31

        assert KECCAK256.combine_sorted(large, small) == keccak256(small + large)

    def test_equal_inputs(self):
        a = keccak256(b"same")
        assert KECCAK256.combine_sorted(a, a) == keccak256(a + a)

    def test_hasher_specific(self):
        a = keccak256(b"a")
        b = keccak256(b"b")

        assert KECCAK256.combine_sorted(a, b) != SHA256.combine_sorted(a, b)

    def test_custom_hasher(self):
        """Any bytes -> bytes function can back a Hasher."""
        blake = Hasher(
            name="blake2b-256",
            digest_size=32,
            func=lambda data: hashlib.blake2b(data, digest_size=32).digest(),
        )
        a, b = blake.hash(b"a"), blake.hash(b"b")

        assert blake.combine_sorted(a, b) == blake.combine_sorted(b, a)
        assert "blake2b-256" in repr(blake)


class TestHasherRegistry:
    """Tests for get_hasher()."""

    def test_builtin_names(self):
        assert get_hasher("keccak256") is KECCAK256
        assert get_hasher("sha256") is SHA256

    def test_case_insensitive(self):
        assert get_hasher("KECCAK256") is KECCAK256
        assert get_hasher(" Sha256 ") is SHA256

    def test_unknown_raises(self):
        with pytest.raises(UnsupportedHashAlgorithmError) as exc_info:
            get_hasher("md5")

        assert exc_info.value.details["algorithm"] == "md5"
        assert exc_info.value.details["supported"] == ["keccak256", "sha256"]

    def test_unknown_is_value_error(self):
        with pytest.raises(ValueError):
            get_hasher("sha1")

    def test_supported_list(self):
        assert supported_hash_algorithms() == ["keccak256", "sha256"]


class TestHexEncoding:
    """Tests for to_hex() / from_hex()."""

    def test_to_hex_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_accepts_upper_case_digits(self):
        assert from_hex("0xDEADBEEF") == bytes.fromhex("deadbeef")

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
