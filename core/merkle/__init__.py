"""
Merkle Tree and Inclusion Proofs
Binary hash tree construction over string preimages, plus proof
generation/verification.

This module provides:
- hash_leaf / pad_leaves / combine_digests: the building blocks
- build_merkle_tree / build_padded_tree: materialized trees for display
- build_merkle_proof / verify_merkle_proof: inclusion proofs
- tree_to_dict / render_tree_text: plain-data and text views

Commitment Rules:
1. Leaf hashing: H(utf8(preimage))
2. Parent hashing: H(unhex(left) + unhex(right)) or H(unhex(hex(left + right)))
3. Padding: "copy" the last leaf or append "0" up to a power of two
4. Odd level: duplicate the last node
5. Single leaf: root = leaf
6. Empty leaves: no tree, no proof

Usage:
    from core.merkle import build_padded_tree, MerkleProver, MerkleVerifier
    from core.schemas import TreeConfig

    config = TreeConfig(algorithm="sha256")
    root = build_padded_tree(["a", "b", "c"], config)
    proof = MerkleProver.prove(["a", "b", "c"], 2, config)
    assert MerkleVerifier.verify(proof, root.digest, config)
"""
from .merkle_tree import (
    ZERO_PREIMAGE,
    MerkleNode,
    is_power_of_two,
    next_power_of_two,
    hash_leaf,
    pad_leaves,
    combine_digests,
    combine_level,
    make_leaf_node,
    build_merkle_tree,
    build_padded_tree,
    compute_merkle_root,
    iter_leaves,
    tree_levels,
    tree_depth,
    compute_tree_depth,
    resolve_combine_method,
    resolve_pad_strategy,
)

from .merkle_proofs import (
    MerkleProof,
    ProofCheck,
    build_merkle_proof,
    check_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    MerkleProver,
    MerkleVerifier,
)

from .render import (
    truncate_digest,
    tree_to_dict,
    render_tree_text,
)


__all__ = [
    # Tree
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
    "resolve_combine_method",
    "resolve_pad_strategy",
    # Proofs
    "MerkleProof",
    "ProofCheck",
    "check_merkle_proof",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
    # Rendering
    "truncate_digest",
    "tree_to_dict",
    "render_tree_text",
]
