"""
Core cryptographic utilities.

Provides the digest functions and the sorted-pair combiner.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
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

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "KECCAK256",
    "SHA256",
    "Hasher",
    "from_hex",
    "get_hasher",
    "keccak256",
    "sha256",
    "supported_hash_algorithms",
    "to_hex",
]
