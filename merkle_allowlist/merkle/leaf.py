"""
Leaf Encoding
Canonical serialization of allowlist entries into Merkle leaves.

Canonical Leaf Rules (Hard Contracts):
1. encode(identity, index) = identity + index.to_bytes(index_width, "big")
2. identity must be exactly identity_width bytes (default 20, an EVM address)
3. index must be a non-negative int that fits in index_width bytes
   (default 32, a uint256)
4. leaf = hasher.hash(encode(identity, index))

With the defaults the encoding is byte-identical to Solidity's
abi.encodePacked(address, uint256), so an on-chain verifier can rebuild the
leaf from msg.sender and the claimed index.

Determinism Notes:
- Entry order is defined by the caller and never re-sorted here
- The index is explicit; it is not inferred from list position unless the
  caller asks for that via entries_from_addresses()
- Duplicate identities at different indices produce different leaves
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from eth_utils import (
    is_checksum_address,
    is_checksum_formatted_address,
    is_hex_address,
    to_canonical_address,
)

from merkle_allowlist.crypto.hashing import KECCAK256, Hasher
from merkle_allowlist.schemas.errors import EncodingError


DEFAULT_IDENTITY_WIDTH: int = 20
DEFAULT_INDEX_WIDTH: int = 32


@dataclass(frozen=True)
class Entry:
    """
    One eligible allowlist entry.

    Attributes:
        identity: Fixed-width identity bytes (e.g. a 20-byte address)
        index: Index assigned by the caller (e.g. ticket or token id)
    """
    identity: bytes
    index: int

    @classmethod
    def from_address(cls, address: str, index: int) -> "Entry":
        """
        Create an entry from a 0x-prefixed hex EVM address.

        Lower-case, upper-case and valid EIP-55 checksummed addresses are
        accepted; mixed-case addresses with a bad checksum are rejected.

        Raises:
            EncodingError: If the address is not a valid hex address
        """
        if not isinstance(address, str) or not is_hex_address(address):
            raise EncodingError(f"Invalid hex address: {address!r}", index=index)
        if is_checksum_formatted_address(address) and not is_checksum_address(address):
            raise EncodingError(f"Address checksum mismatch: {address}", index=index)
        return cls(identity=to_canonical_address(address), index=index)

    @property
    def address(self) -> str:
        """Identity rendered as 0x hex."""
        return "0x" + self.identity.hex()


def entries_from_addresses(addresses: Iterable[str], start: int = 0) -> list[Entry]:
    """
    Bind each address to start + its position in the input.

    This is the usual allowlist convention (the n-th claimant owns ticket
    start + n). Duplicate addresses are kept and receive distinct indices.
    """
    return [
        Entry.from_address(address, start + position)
        for position, address in enumerate(addresses)
    ]


class LeafEncoder:
    """
    Deterministic encoder from (identity, index) to leaf bytes and digests.

    Example:
        >>> encoder = LeafEncoder()
        >>> len(encoder.encode(b"\\x11" * 20, 1))
        52
    """

    def __init__(
        self,
        identity_width: int = DEFAULT_IDENTITY_WIDTH,
        index_width: int = DEFAULT_INDEX_WIDTH,
        hasher: Hasher = KECCAK256,
    ) -> None:
        if identity_width <= 0:
            raise ValueError(f"identity_width must be positive, got {identity_width}")
        if index_width <= 0:
            raise ValueError(f"index_width must be positive, got {index_width}")
        self.identity_width = identity_width
        self.index_width = index_width
        self.hasher = hasher

    def encode(self, identity: bytes, index: int) -> bytes:
        """
        Canonically encode an identity and its index.

        Raises:
            EncodingError: If identity has the wrong type or width, or index
                is not a non-negative int that fits in index_width bytes
        """
        if not isinstance(identity, (bytes, bytearray, memoryview)):
            raise EncodingError(
                f"Identity must be bytes, got {type(identity).__name__}",
                index=index if isinstance(index, int) else None,
            )
        identity = bytes(identity)
        if len(identity) != self.identity_width:
            raise EncodingError(
                f"Identity must be {self.identity_width} bytes, got {len(identity)}",
                index=index if isinstance(index, int) else None,
                details={"expected": self.identity_width, "actual": len(identity)},
            )
        # bool is an int subclass but never a meaningful index
        if isinstance(index, bool) or not isinstance(index, int):
            raise EncodingError(f"Index must be an int, got {type(index).__name__}")
        if index < 0:
            raise EncodingError(f"Index must be non-negative, got {index}", index=index)
        if index.bit_length() > self.index_width * 8:
            raise EncodingError(
                f"Index {index} does not fit in {self.index_width} bytes",
                index=index,
            )
        return identity + index.to_bytes(self.index_width, "big")

    def encode_entry(self, entry: Entry) -> bytes:
        return self.encode(entry.identity, entry.index)

    def leaf_digest(self, identity: bytes, index: int) -> bytes:
        """Leaf digest: hash(encode(identity, index))."""
        return self.hasher.hash(self.encode(identity, index))

    def leaf_digests(self, entries: Sequence[Entry]) -> list[bytes]:
        """Leaf digests for entries, in input order."""
        return [self.leaf_digest(entry.identity, entry.index) for entry in entries]

    def __repr__(self) -> str:
        return (
            f"LeafEncoder(identity_width={self.identity_width}, "
            f"index_width={self.index_width}, hasher={self.hasher.name!r})"
        )


__all__ = [
    "DEFAULT_IDENTITY_WIDTH",
    "DEFAULT_INDEX_WIDTH",
    "Entry",
    "LeafEncoder",
    "entries_from_addresses",
]
