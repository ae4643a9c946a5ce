"""
Common test fixtures shared by all modules.

Provides factory functions for allowlist data:
- Entry lists (synthetic identities or real-looking addresses)
- Encoders and pre-built trees
"""

from typing import Optional

from merkle_allowlist.crypto.hashing import KECCAK256, Hasher
from merkle_allowlist.merkle.leaf import Entry, LeafEncoder, entries_from_addresses
from merkle_allowlist.merkle.merkle_tree import MerkleTree, build_tree


# Remix default accounts; the last address appears twice on purpose
WHITELIST_ADDRESSES: list[str] = [
    "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4",
    "0xAb8483F64d9C6d1EcF9b849Ae677dD3315835cb2",
    "0x4B20993Bc481177ec7E8f571ceCaE8A9e22C02db",
    "0x78731D3Ca6b7E34aC0F824c42a7cC18A495cabaB",
    "0x17F6AD8Ef982297579C203069C1DbfFE4348c372",
    "0x5c6B0f7Bf3E7ce046039Bd8FABdfD3f9F5021678",
    "0x03C6FcED478cBbC9a4FAB34eF9f40767739D1Ff7",
    "0x03C6FcED478cBbC9a4FAB34eF9f40767739D1Ff7",
]


def make_identity(seed: int, width: int = 20) -> bytes:
    """Deterministic fixed-width identity derived from seed."""
    return KECCAK256.hash(seed.to_bytes(8, "big"))[:width]


def make_entries(count: int, width: int = 20) -> list[Entry]:
    """count entries with distinct identities bound to their position."""
    return [Entry(identity=make_identity(i, width), index=i) for i in range(count)]


def make_encoder(hasher: Hasher = KECCAK256) -> LeafEncoder:
    return LeafEncoder(hasher=hasher)


def make_whitelist_entries() -> list[Entry]:
    return entries_from_addresses(WHITELIST_ADDRESSES)


def make_tree(count: int, encoder: Optional[LeafEncoder] = None) -> MerkleTree:
    """Tree over make_entries(count)."""
    return build_tree(make_entries(count), encoder=encoder or make_encoder())
