"""
Merkle Tree Implementation
Leaf hashing, power-of-two padding, node combination and tree construction.

This module provides:
- hash_leaf: digest of a preimage's UTF-8 bytes
- pad_leaves: extend a leaf list to the next power of two
- combine_digests: parent digest of two children (concat or sum)
- build_merkle_tree: full node structure over already padded leaves
- build_padded_tree: pad, then build

Commitment Rules (Hard Contracts):
1. Leaf: leaf = H(utf8(preimage)), no special-casing of empty or numeric text
2. Parent (concat): H(unhex(a) + unhex(b)); with commutative=True the pair
   is sorted lexically (lower-cased hex) first when a != b
3. Parent (sum): H(unhex(hex(int(a, 16) + int(b, 16)))), order independent,
   no fixed width, so internal digests may hash inputs longer than a digest
4. Odd level: the last node is paired with itself
5. Single leaf: root is the leaf node itself
6. Empty leaves: no tree (None)

Determinism Notes:
- No randomness, no clock, no shared state between calls
- Leaf order is defined by the caller and never changed here
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from core.crypto.hashing import (
    check_digest,
    decode_digest,
    digest as digest_bytes,
    digest_to_int,
    hash_text,
    int_to_bytes,
    resolve_algorithm,
)
from core.schemas.errors import SchemaValidationException
from core.schemas.tree import CombineMethod, HashAlgorithm, PadStrategy, TreeConfig


logger = logging.getLogger(__name__)

# Preimage appended by the "zero" pad strategy
ZERO_PREIMAGE = "0"


@dataclass(frozen=True, eq=False)
class MerkleNode:
    """
    A node in a materialized Merkle tree.

    Leaves carry their preimage and have no children. Internal nodes
    carry both children; when a level had odd length the right child
    is the very same object as the left child.

    Attributes:
        digest: Lower-case hex digest of this node
        left: Left child (internal nodes only)
        right: Right child (internal nodes only)
        preimage: Original leaf string (leaves only)
    """
    digest: str
    left: MerkleNode | None = None
    right: MerkleNode | None = None
    preimage: str | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def is_duplicated_pair(self) -> bool:
        """True when this node combined a single child with itself."""
        return self.left is not None and self.right is self.left

    def children(self) -> list[MerkleNode]:
        """Distinct children, left to right."""
        if self.left is None:
            return []
        if self.right is None or self.right is self.left:
            return [self.left]
        return [self.left, self.right]


def resolve_pad_strategy(strategy: PadStrategy | str) -> PadStrategy:
    try:
        return PadStrategy(strategy)
    except ValueError:
        raise SchemaValidationException(
            f"Unknown pad strategy: {strategy!r}",
            field_path="pad_strategy",
            details={"supported": [s.value for s in PadStrategy]},
        ) from None


def resolve_combine_method(method: CombineMethod | str) -> CombineMethod:
    try:
        return CombineMethod(method)
    except ValueError:
        raise SchemaValidationException(
            f"Unknown combine method: {method!r}",
            field_path="combine_method",
            details={"supported": [m.value for m in CombineMethod]},
        ) from None


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def hash_leaf(preimage: str, algorithm: HashAlgorithm | str) -> str:
    """
    Digest of a leaf preimage.

    Preimages are hashed as raw text bytes, never as parsed numbers.

    Example:
        >>> hash_leaf("", "sha256")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    return hash_text(preimage, algorithm)


def pad_leaves(
    leaves: Sequence[str],
    strategy: PadStrategy | str = PadStrategy.COPY,
) -> list[str]:
    """
    Extend a leaf list to the next power-of-two length.

    The input is never reordered or modified; padding is only appended.
    Padding entries sit at positions [n, m) of the result.

    Args:
        leaves: Ordered leaf preimages
        strategy: "copy" repeats the last real leaf, "zero" appends "0"

    Returns:
        A new list of length next_power_of_two(len(leaves)), or [] if empty

    Example:
        >>> pad_leaves(["a", "b", "c"], "copy")
        ['a', 'b', 'c', 'c']
        >>> pad_leaves(["a", "b", "c"], "zero")
        ['a', 'b', 'c', '0']
    """
    pad = resolve_pad_strategy(strategy)
    padded = list(leaves)
    n = len(padded)
    if n == 0:
        return padded

    missing = next_power_of_two(n) - n
    if missing == 0:
        return padded

    filler = padded[-1] if pad is PadStrategy.COPY else ZERO_PREIMAGE
    padded.extend([filler] * missing)
    return padded


def combine_digests(
    left: str,
    right: str,
    algorithm: HashAlgorithm | str,
    combine_method: CombineMethod | str = CombineMethod.CONCAT,
    commutative: bool = False,
) -> str:
    """
    Compute the parent digest of two child digests.

    The combined bytes are always re-hashed with the digest provider;
    the raw concatenation or sum is never used as a digest directly.

    Args:
        left: Left child digest (hex)
        right: Right child digest (hex)
        algorithm: Digest algorithm for the parent
        combine_method: "concat" or "sum"
        commutative: Sort the pair before concatenation (ignored by "sum",
            which is order independent already)

    Returns:
        Parent digest (hex)

    Raises:
        MalformedDigestException: If either child is not valid hex
        UnsupportedAlgorithmException: If the algorithm is unknown
    """
    method = resolve_combine_method(combine_method)

    if method is CombineMethod.SUM:
        total = digest_to_int(left) + digest_to_int(right)
        payload = int_to_bytes(total)
    else:
        # Sort order is over lower-case hex
        a, b = check_digest(left).lower(), check_digest(right).lower()
        if commutative and a != b:
            a, b = sorted((a, b))
        payload = decode_digest(a) + decode_digest(b)

    return digest_bytes(algorithm, payload)


def combine_level(
    digests: Sequence[str],
    algorithm: HashAlgorithm | str,
    combine_method: CombineMethod | str = CombineMethod.CONCAT,
    commutative: bool = False,
) -> list[str]:
    """
    Combine adjacent pairs of a digest level into the next level up.

    An odd trailing digest is combined with itself.
    """
    next_level: list[str] = []
    for i in range(0, len(digests), 2):
        left = digests[i]
        right = digests[i + 1] if i + 1 < len(digests) else left
        next_level.append(
            combine_digests(left, right, algorithm, combine_method, commutative)
        )
    return next_level


def make_leaf_node(preimage: str, algorithm: HashAlgorithm | str) -> MerkleNode:
    return MerkleNode(digest=hash_leaf(preimage, algorithm), preimage=preimage)


def build_merkle_tree(
    leaves: Sequence[str],
    algorithm: HashAlgorithm | str,
    commutative: bool = False,
    combine_method: CombineMethod | str = CombineMethod.CONCAT,
) -> MerkleNode | None:
    """
    Build a Merkle tree over already padded leaf preimages.

    Algorithm:
    1. If empty: return None
    2. Hash every preimage into a leaf node
    3. While more than one node remains, pair (nodes[2i], nodes[2i+1]);
       an odd trailing node is paired with itself
    4. The last remaining node is the root

    A single leaf yields that leaf node as the root.

    Example:
        >>> root = build_merkle_tree(["a", "b", "c", "d"], "sha256")
        >>> root.left.left.preimage
        'a'
    """
    if len(leaves) == 0:
        return None

    alg = resolve_algorithm(algorithm)
    method = resolve_combine_method(combine_method)

    level: list[MerkleNode] = [make_leaf_node(p, alg) for p in leaves]
    height = 0

    while len(level) > 1:
        if len(level) % 2 == 1:
            logger.debug(f"Level {height} has odd length {len(level)}; duplicating last node")

        next_level: list[MerkleNode] = []
        for i in range(0, len(level), 2):
            left = level[i]
            right = level[i + 1] if i + 1 < len(level) else left
            parent_digest = combine_digests(
                left.digest, right.digest, alg, method, commutative
            )
            next_level.append(MerkleNode(digest=parent_digest, left=left, right=right))

        level = next_level
        height += 1

    logger.debug(
        f"Built {alg.value}/{method.value} tree over {len(leaves)} leaves, height {height}"
    )
    return level[0]


def build_padded_tree(
    leaves: Sequence[str],
    config: TreeConfig | None = None,
) -> MerkleNode | None:
    """Pad leaves per config.pad_strategy, then build the tree."""
    config = config or TreeConfig()
    padded = pad_leaves(leaves, config.pad_strategy)
    return build_merkle_tree(
        padded,
        config.algorithm,
        commutative=config.commutative,
        combine_method=config.combine_method,
    )


def compute_merkle_root(
    leaves: Sequence[str],
    config: TreeConfig | None = None,
) -> str | None:
    """Root digest of the padded tree, without materializing nodes."""
    config = config or TreeConfig()
    level = [hash_leaf(p, config.algorithm) for p in pad_leaves(leaves, config.pad_strategy)]
    if not level:
        return None
    while len(level) > 1:
        level = combine_level(level, config.algorithm, config.combine_method, config.commutative)
    return level[0]


def iter_leaves(root: MerkleNode | None) -> Iterator[MerkleNode]:
    """Yield distinct leaf nodes left to right."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
        else:
            stack.extend(reversed(node.children()))


def tree_levels(root: MerkleNode | None) -> list[list[str]]:
    """
    Digests of each level, leaf level first and root level last.

    Logically duplicated right children are not repeated, so each level
    lists the nodes that were actually built.
    """
    if root is None:
        return []
    levels: list[list[str]] = []
    current = [root]
    while current:
        levels.append([n.digest for n in current])
        current = [child for n in current for child in n.children()]
    levels.reverse()
    return levels


def tree_depth(root: MerkleNode | None) -> int:
    """Number of levels above the leaves (0 for a single leaf or no tree)."""
    depth = 0
    node = root
    while node is not None and node.left is not None:
        node = node.left
        depth += 1
    return depth


def compute_tree_depth(num_leaves: int) -> int:
    """
    Levels above the leaves for a tree over num_leaves padded leaves.

    Equals log2(k) for k = next_power_of_two(num_leaves); 0 when empty
    or for a single leaf.
    """
    if num_leaves <= 1:
        return 0
    return (num_leaves - 1).bit_length()


__all__ = [
    "ZERO_PREIMAGE",
    "MerkleNode",
    "is_power_of_two",
    "next_power_of_two",
    "hash_leaf",
    "pad_leaves",
    "combine_digests",
    "combine_level",
    "make_leaf_node",
    "build_merkle_tree",
    "build_padded_tree",
    "compute_merkle_root",
    "iter_leaves",
    "tree_levels",
    "tree_depth",
    "compute_tree_depth",
]
