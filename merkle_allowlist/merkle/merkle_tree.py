"""
Merkle Tree Implementation
Deterministic sorted-pair Merkle tree construction over allowlist leaves.

This module provides:
- MerkleTree: immutable record of every layer, leaves to root
- build_tree: encode + hash entries, then build all layers
- compute_tree_depth: number of layers for a given leaf count

Canonical Commitment Rules (Hard Contracts):
1. Leaf: hasher.hash(LeafEncoder.encode(identity, index))
2. Parent: hasher.combine_sorted(left, right) = hash(min + max)
3. Odd layer: the last node is carried forward unchanged to the next layer
   (it is NOT hashed with itself)
4. Empty input: EmptyInputError, there is no empty-tree sentinel
5. Single leaf: root = leaf, proof is empty

These rules match merkletreejs with {sortPairs: true} and OpenZeppelin's
MerkleProof.verify, so proofs produced here verify on-chain unchanged.

Determinism Notes:
- Leaf ordering is defined by the caller and never sorted here
- Parallel construction produces byte-identical layers to the sequential path
"""
from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from merkle_allowlist.crypto.hashing import KECCAK256, Hasher, to_hex
from merkle_allowlist.merkle.leaf import Entry, LeafEncoder
from merkle_allowlist.schemas.errors import (
    EmptyInputError,
    IndexOutOfRangeError,
    MalformedDigestError,
    NotFoundError,
)

if TYPE_CHECKING:
    from merkle_allowlist.config.runtime import RuntimeConfig

logger = logging.getLogger(__name__)


Layer = tuple[bytes, ...]


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable sorted-pair Merkle tree.

    Always construct through MerkleTree.from_leaves() or build_tree();
    both guarantee the layers are consistent with the hasher.

    Attributes:
        layers: All layers, layers[0] = leaves, layers[-1] = (root,)
        hasher: Hasher used for every pair combination
    """
    layers: tuple[Layer, ...]
    hasher: Hasher = KECCAK256

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[bytes],
        hasher: Hasher = KECCAK256,
        *,
        max_workers: Optional[int] = None,
        parallel_threshold: int = 1024,
    ) -> "MerkleTree":
        """
        Build a tree from pre-hashed leaf digests.

        Algorithm:
        1. Validate leaves (non-empty, each hasher.digest_size bytes)
        2. While the current layer has more than one node:
           - combine nodes (0,1), (2,3), ... with combine_sorted
           - carry an unpaired last node forward unchanged
        3. The single node of the last layer is the root

        Args:
            leaves: Leaf digests, order preserved
            hasher: Hasher for pair combination
            max_workers: Thread pool size; None or <= 1 builds sequentially
            parallel_threshold: Minimum pairs in a layer before the pool is used

        Raises:
            EmptyInputError: If leaves is empty
            MalformedDigestError: If a leaf has the wrong width
        """
        if len(leaves) == 0:
            raise EmptyInputError("Cannot build a Merkle tree from an empty leaf list")

        for position, leaf in enumerate(leaves):
            if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != hasher.digest_size:
                size = len(leaf) if isinstance(leaf, (bytes, bytearray)) else None
                raise MalformedDigestError(
                    f"Leaf {position} must be a {hasher.digest_size}-byte digest",
                    expected=hasher.digest_size,
                    actual=size,
                    details={"position": position},
                )

        current: Layer = tuple(bytes(leaf) for leaf in leaves)
        layers: list[Layer] = [current]

        executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
        if max_workers is not None and max_workers > 1 and len(current) // 2 >= parallel_threshold:
            executor = concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)

        try:
            while len(current) > 1:
                use_pool = executor is not None and len(current) // 2 >= parallel_threshold
                current = _next_layer(current, hasher, executor if use_pool else None)
                layers.append(current)
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        logger.debug(
            "Built Merkle tree: %d leaves, %d layers, root=%s",
            len(layers[0]),
            len(layers),
            to_hex(layers[-1][0]),
        )
        return cls(layers=tuple(layers), hasher=hasher)

    @property
    def root(self) -> bytes:
        """The root digest (the published commitment)."""
        return self.layers[-1][0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    @property
    def leaves(self) -> Layer:
        return self.layers[0]

    @property
    def hex_leaves(self) -> list[str]:
        return [to_hex(leaf) for leaf in self.leaves]

    @property
    def leaf_count(self) -> int:
        return len(self.layers[0])

    @property
    def layer_count(self) -> int:
        """Number of layers including leaves and root."""
        return len(self.layers)

    @property
    def depth(self) -> int:
        """Number of combination levels above the leaves (0 for one leaf)."""
        return len(self.layers) - 1

    @property
    def hex_layers(self) -> list[list[str]]:
        return [[to_hex(node) for node in layer] for layer in self.layers]

    def layer(self, level: int) -> Layer:
        """
        Return one layer, level 0 = leaves, level layer_count - 1 = root.

        Raises:
            IndexOutOfRangeError: If level is outside 0..layer_count - 1
        """
        if level < 0 or level >= len(self.layers):
            raise IndexOutOfRangeError(
                f"Layer {level} out of range for {len(self.layers)} layers",
                index=level,
                size=len(self.layers),
            )
        return self.layers[level]

    def leaf_index(self, leaf: bytes) -> int:
        """
        Position of the first occurrence of leaf in level 0.

        Raises:
            NotFoundError: If leaf is not a leaf of this tree
        """
        try:
            return self.layers[0].index(leaf)
        except ValueError:
            raise NotFoundError(
                "Leaf digest is not present in the tree",
                leaf=to_hex(leaf) if isinstance(leaf, (bytes, bytearray)) else repr(leaf),
            ) from None

    def __contains__(self, leaf: object) -> bool:
        return leaf in self.layers[0]

    def __len__(self) -> int:
        return self.leaf_count


def _next_layer(
    layer: Layer,
    hasher: Hasher,
    executor: Optional[concurrent.futures.Executor] = None,
) -> Layer:
    """Combine adjacent pairs; an unpaired last node is carried forward."""
    pair_count = len(layer) // 2
    lefts = layer[0 : 2 * pair_count : 2]
    rights = layer[1 : 2 * pair_count : 2]

    if executor is not None:
        parents = list(executor.map(hasher.combine_sorted, lefts, rights))
    else:
        parents = [hasher.combine_sorted(left, right) for left, right in zip(lefts, rights)]

    if len(layer) % 2 == 1:
        parents.append(layer[-1])
    return tuple(parents)


def build_tree(
    entries: Sequence[Entry],
    *,
    encoder: Optional[LeafEncoder] = None,
    config: Optional["RuntimeConfig"] = None,
    max_workers: Optional[int] = None,
) -> MerkleTree:
    """
    Build a Merkle tree over allowlist entries.

    Each entry is canonically encoded and hashed into a leaf, in input order,
    then all layers are built bottom-up.

    Args:
        entries: Entries in commitment order (never re-sorted)
        encoder: Leaf encoder; defaults to one derived from config
        config: Runtime configuration; defaults to get_default_config()
        max_workers: Overrides config.build.max_workers

    Returns:
        The complete, immutable MerkleTree

    Raises:
        EmptyInputError: If entries is empty
        EncodingError: If any entry cannot be encoded (no partial tree)

    Example:
        >>> tree = build_tree(entries_from_addresses(addresses))
        >>> tree.hex_root
        '0x...'
    """
    if len(entries) == 0:
        raise EmptyInputError()

    if config is None:
        from merkle_allowlist.config.runtime import get_default_config
        config = get_default_config()
    if encoder is None:
        encoder = config.encoder()
    if max_workers is None:
        max_workers = config.build.max_workers

    leaves = encoder.leaf_digests(entries)
    return MerkleTree.from_leaves(
        leaves,
        encoder.hasher,
        max_workers=max_workers,
        parallel_threshold=config.build.parallel_threshold,
    )


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of layers of a tree with num_leaves leaves.

    Layers include the leaf layer and the root layer. A single leaf has
    one layer, two leaves have two, three leaves have three (the third
    leaf is carried forward into layer 1).

    Returns:
        Layer count (0 for an empty tree)
    """
    if num_leaves <= 0:
        return 0

    layers = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        layers += 1

    return layers


__all__ = [
    "Layer",
    "MerkleTree",
    "build_tree",
    "compute_tree_depth",
]
