"""
Merkle Proofs
Inclusion proof generation, recombination and verification.

This module provides:
- MerkleProof: sibling digests (leaf level first) plus the proven leaf
- build_merkle_proof: recompute levels from the leaves, recording siblings
- compute_root_from_proof / verify_merkle_proof: the verification counterpart
- MerkleProver / MerkleVerifier: TreeConfig-driven convenience wrappers

Proof generation never needs a materialized tree; it works on a flat list
of digests per level, using the same pairing and odd-duplication rule as
the tree builder.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.crypto.hashing import check_digest, resolve_algorithm
from core.merkle.merkle_tree import (
    combine_digests,
    combine_level,
    hash_leaf,
    pad_leaves,
    resolve_combine_method,
)
from core.schemas.canonical import dumps_canonical, loads_canonical
from core.schemas.errors import MerkleVerificationException, SchemaValidationException
from core.schemas.tree import CombineMethod, HashAlgorithm, PadStrategy, TreeConfig


logger = logging.getLogger(__name__)


class MerkleProof(BaseModel):
    """
    An inclusion proof for one leaf.

    Serialized field names are stable: siblingDigests, leafPreimage,
    leafIndex. The proof holds no reference to any tree.

    Attributes:
        sibling_digests: Sibling digest per level, leaf level first
        leaf_preimage: Preimage of the proven (unpadded) leaf
        leaf_index: 0-based index of the leaf in the unpadded input
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    sibling_digests: list[str] = Field(
        default_factory=list,
        alias="siblingDigests",
        description="Sibling digests from the leaf level up to just below the root",
    )
    leaf_preimage: str = Field(
        ...,
        alias="leafPreimage",
        description="Original preimage of the proven leaf",
    )
    leaf_index: int = Field(
        ...,
        ge=0,
        alias="leafIndex",
        description="0-based index of the leaf in the unpadded input",
    )

    @property
    def depth(self) -> int:
        return len(self.sibling_digests)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        """Canonical JSON export (sorted keys, no whitespace)."""
        return dumps_canonical(self)

    @classmethod
    def from_json(cls, data: str) -> MerkleProof:
        """
        Parse an exported proof.

        Raises:
            SchemaValidationException: If the JSON does not describe a proof
        """
        raw = loads_canonical(data)
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise SchemaValidationException(
                "Invalid proof document",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


def build_merkle_proof(
    leaves: Sequence[str],
    algorithm: HashAlgorithm | str,
    leaf_index: int,
    commutative: bool = False,
    combine_method: CombineMethod | str = CombineMethod.CONCAT,
    pad_strategy: PadStrategy | str = PadStrategy.COPY,
) -> MerkleProof | None:
    """
    Generate an inclusion proof for the leaf at leaf_index.

    The index is checked against the unpadded input, matching what a user
    can select; padding is applied internally before hashing.

    Algorithm:
    1. Pad the leaves and hash each preimage (flat digest list)
    2. At each level record level[index ^ 1] when it exists
    3. Combine adjacent pairs into the next level, index //= 2
    4. Stop when one digest remains

    Returns:
        MerkleProof, or None when leaves is empty or leaf_index is out of range
    """
    if len(leaves) == 0 or leaf_index < 0 or leaf_index >= len(leaves):
        return None

    alg = resolve_algorithm(algorithm)
    method = resolve_combine_method(combine_method)

    level = [hash_leaf(p, alg) for p in pad_leaves(leaves, pad_strategy)]
    index = leaf_index
    siblings: list[str] = []

    while len(level) > 1:
        sibling_index = index ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])

        level = combine_level(level, alg, method, commutative)
        index //= 2

    logger.debug(f"Proof for leaf {leaf_index} of {len(leaves)}: {len(siblings)} siblings")
    return MerkleProof(
        sibling_digests=siblings,
        leaf_preimage=leaves[leaf_index],
        leaf_index=leaf_index,
    )


def compute_root_from_proof(
    leaf_digest: str,
    leaf_index: int,
    sibling_digests: Sequence[str],
    algorithm: HashAlgorithm | str,
    commutative: bool = False,
    combine_method: CombineMethod | str = CombineMethod.CONCAT,
) -> str:
    """
    Recombine a leaf digest with its siblings up to a root digest.

    At step i the running digest is the left operand when the index is
    even at that level and the right operand when it is odd.

    Raises:
        MalformedDigestException: If any digest is not valid hex
    """
    current = check_digest(leaf_digest)
    index = leaf_index

    for sibling in sibling_digests:
        if index % 2 == 0:
            current = combine_digests(current, sibling, algorithm, combine_method, commutative)
        else:
            current = combine_digests(sibling, current, algorithm, combine_method, commutative)
        index //= 2

    return current


@dataclass(frozen=True)
class ProofCheck:
    """
    Outcome of checking a proof against a root.

    Attributes:
        ok: True if the proof reproduces the expected root
        computed_root: Root recombined from the leaf and its siblings
        expected_root: Caller's root, lower-cased
        in_range: False when leaf_index is too large for the sibling count
    """
    ok: bool
    computed_root: str
    expected_root: str
    in_range: bool

    @property
    def reason(self) -> str | None:
        if self.ok:
            return None
        return "leaf index exceeds tree width" if not self.in_range else "root mismatch"


def check_merkle_proof(
    proof: MerkleProof,
    root: str,
    algorithm: HashAlgorithm | str,
    commutative: bool = False,
    combine_method: CombineMethod | str = CombineMethod.CONCAT,
) -> ProofCheck:
    """
    Recombine a proof and compare it with a root digest.

    Recomputes the leaf digest from the preimage, recombines it with the
    siblings and compares the result with root. A leaf index too large for
    the number of siblings cannot belong to the tree and fails.

    Raises:
        MalformedDigestException: If root or a sibling is not valid hex
    """
    expected = check_digest(root).lower()
    leaf_digest = hash_leaf(proof.leaf_preimage, algorithm)
    computed = compute_root_from_proof(
        leaf_digest,
        proof.leaf_index,
        proof.sibling_digests,
        algorithm,
        commutative=commutative,
        combine_method=combine_method,
    )

    in_range = proof.leaf_index < (1 << len(proof.sibling_digests))
    return ProofCheck(
        ok=in_range and computed == expected,
        computed_root=computed,
        expected_root=expected,
        in_range=in_range,
    )


def verify_merkle_proof(
    proof: MerkleProof,
    root: str,
    algorithm: HashAlgorithm | str,
    commutative: bool = False,
    combine_method: CombineMethod | str = CombineMethod.CONCAT,
    raise_on_failure: bool = False,
) -> bool:
    """
    Verify a proof against a root digest.

    Returns:
        True if the proof reproduces root

    Raises:
        MerkleVerificationException: On failure, if raise_on_failure is set
        MalformedDigestException: If root or a sibling is not valid hex
    """
    result = check_merkle_proof(
        proof,
        root,
        algorithm,
        commutative=commutative,
        combine_method=combine_method,
    )

    if not result.ok:
        logger.debug(
            f"Proof for leaf {proof.leaf_index} failed: "
            f"computed {result.computed_root}, expected {result.expected_root}"
        )
        if raise_on_failure:
            raise MerkleVerificationException(
                f"Merkle proof verification failed: {result.reason}",
                leaf_index=proof.leaf_index,
                details={
                    "computed_root": result.computed_root,
                    "expected_root": result.expected_root,
                },
            )
    return result.ok


class MerkleProver:
    """
    Convenience class for generating proofs and roots from a TreeConfig.

    Example:
        >>> config = TreeConfig(algorithm="sha256")
        >>> proof = MerkleProver.prove(["a", "b", "c"], 1, config)
        >>> proof.leaf_preimage
        'b'
    """

    @staticmethod
    def prove(
        leaves: Sequence[str],
        index: int,
        config: TreeConfig | None = None,
    ) -> MerkleProof | None:
        config = config or TreeConfig()
        return build_merkle_proof(
            leaves,
            config.algorithm,
            index,
            commutative=config.commutative,
            combine_method=config.combine_method,
            pad_strategy=config.pad_strategy,
        )

    @staticmethod
    def prove_all(
        leaves: Sequence[str],
        config: TreeConfig | None = None,
    ) -> list[MerkleProof]:
        """One proof per real (unpadded) leaf."""
        proofs = []
        for i in range(len(leaves)):
            proof = MerkleProver.prove(leaves, i, config)
            if proof is not None:
                proofs.append(proof)
        return proofs


class MerkleVerifier:
    """
    Convenience class for verifying proofs under a TreeConfig.

    The pad strategy plays no part in verification: it only shaped the
    tree the root and siblings came from.
    """

    @staticmethod
    def verify(
        proof: MerkleProof,
        root: str,
        config: TreeConfig | None = None,
    ) -> bool:
        config = config or TreeConfig()
        return verify_merkle_proof(
            proof,
            root,
            config.algorithm,
            commutative=config.commutative,
            combine_method=config.combine_method,
        )

    @staticmethod
    def check(
        proof: MerkleProof,
        root: str,
        config: TreeConfig | None = None,
    ) -> ProofCheck:
        """Like verify(), but also reports the recomputed root."""
        config = config or TreeConfig()
        return check_merkle_proof(
            proof,
            root,
            config.algorithm,
            commutative=config.commutative,
            combine_method=config.combine_method,
        )

    @staticmethod
    def verify_leaf_in_root(
        preimage: str,
        index: int,
        siblings: list[str],
        root: str,
        config: TreeConfig | None = None,
    ) -> bool:
        """Verify raw proof components without building a MerkleProof first."""
        proof = MerkleProof(
            sibling_digests=siblings,
            leaf_preimage=preimage,
            leaf_index=index,
        )
        return MerkleVerifier.verify(proof, root, config)


__all__ = [
    "MerkleProof",
    "build_merkle_proof",
    "compute_root_from_proof",
    "ProofCheck",
    "check_merkle_proof",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
]
