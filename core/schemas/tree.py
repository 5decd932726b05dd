"""
Schemas & Canonicalization
File: tree.py

Purpose: Closed enumerations and the per-call configuration of the
hash tree engine.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HashAlgorithm(str, Enum):
    """Digest algorithms understood by the digest provider."""

    KECCAK = "keccak"
    SHA256 = "sha256"
    BLAKE2B = "blake2b"
    RIPEMD160 = "ripemd160"


class PadStrategy(str, Enum):
    """How a leaf list is extended to the next power of two."""

    COPY = "copy"  # repeat the last real leaf
    ZERO = "zero"  # append the sentinel preimage "0"


class CombineMethod(str, Enum):
    """How two child digests are merged before re-hashing."""

    CONCAT = "concat"
    SUM = "sum"


class TreeConfig(BaseModel):
    """
    Everything that determines a root digest apart from the leaves themselves.

    The surrounding application passes one of these on every call; the
    engine keeps no state between calls.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: HashAlgorithm = Field(
        default=HashAlgorithm.KECCAK,
        description="Digest algorithm used for leaves and internal nodes",
    )
    pad_strategy: PadStrategy = Field(
        default=PadStrategy.COPY,
        description="Padding applied when the leaf count is not a power of two",
    )
    combine_method: CombineMethod = Field(
        default=CombineMethod.CONCAT,
        description="How two child digests are merged",
    )
    commutative: bool = Field(
        default=False,
        description="Sort sibling digests before concatenation",
    )
