"""
Hashing Utilities
Digest functions and the sorted-pair combiner shared by tree construction,
proof generation and proof verification.

This module provides:
- keccak256 (Ethereum flavour, not NIST SHA3-256) and SHA-256 for raw bytes
- Hasher: a named, fixed-width hash with the sorted-pair combiner
- A registry of built-in hashers resolved by name
- Hex encoding/decoding with 0x prefix

Compatibility Surface (must match any external verifier bit-exactly):
1. Digest width: Hasher.digest_size bytes (32 for both built-ins)
2. Pair combination: hash(min(a, b) + max(a, b))
3. Ordering: digests compared as big-endian unsigned integers, which for
   equal-width byte strings is plain lexicographic byte comparison
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable

from eth_utils import keccak

from merkle_allowlist.schemas.errors import UnsupportedHashAlgorithmError


def keccak256(data: bytes) -> bytes:
    """
    Compute the Ethereum keccak-256 hash of raw bytes.

    This is the hash used by Solidity's keccak256() and therefore by
    on-chain verifiers such as OpenZeppelin's MerkleProof.

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


@dataclass(frozen=True)
class Hasher:
    """
    A named fixed-width hash function plus the sorted-pair combiner.

    A single Hasher instance must be shared by every party that builds,
    proves or verifies against the same root.

    Attributes:
        name: Registry name (e.g. "keccak256")
        digest_size: Output width in bytes
        func: The underlying bytes -> digest function
    """
    name: str
    digest_size: int
    func: Callable[[bytes], bytes]

    def hash(self, data: bytes) -> bytes:
        """Hash raw bytes."""
        return self.func(data)

    def combine_sorted(self, left: bytes, right: bytes) -> bytes:
        """
        Combine two sibling digests independent of their order.

        combine_sorted(a, b) == combine_sorted(b, a) == hash(min + max)
        """
        if left <= right:
            return self.func(left + right)
        return self.func(right + left)

    def __repr__(self) -> str:
        return f"Hasher(name={self.name!r}, digest_size={self.digest_size})"


KECCAK256 = Hasher(name="keccak256", digest_size=32, func=keccak256)
SHA256 = Hasher(name="sha256", digest_size=32, func=sha256)

DEFAULT_HASH_ALGORITHM = KECCAK256.name

_HASHERS: dict[str, Hasher] = {
    KECCAK256.name: KECCAK256,
    SHA256.name: SHA256,
}


def get_hasher(name: str) -> Hasher:
    """
    Resolve a built-in hasher by name (case-insensitive).

    Raises:
        UnsupportedHashAlgorithmError: If no hasher is registered under name
    """
    hasher = _HASHERS.get(name.strip().lower())
    if hasher is None:
        raise UnsupportedHashAlgorithmError(name, supported=sorted(_HASHERS))
    return hasher


def supported_hash_algorithms() -> list[str]:
    """Names accepted by get_hasher()."""
    return sorted(_HASHERS)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "keccak256",
    "sha256",
    "Hasher",
    "KECCAK256",
    "SHA256",
    "DEFAULT_HASH_ALGORITHM",
    "get_hasher",
    "supported_hash_algorithms",
    "to_hex",
    "from_hex",
]
