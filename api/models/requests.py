"""
Hashtree API Request Models

Pydantic models for API request validation.

Tree options are plain strings so that unknown values reach the core
resolvers and come back as structured 400 errors.
"""

from typing import Any

from pydantic import BaseModel, Field


class TreeOptions(BaseModel):
    """Per-request overrides of the server's tree configuration."""

    algorithm: str | None = Field(
        default=None,
        description="Hash algorithm: keccak, sha256, blake2b or ripemd160",
    )
    pad_strategy: str | None = Field(
        default=None,
        description="Padding strategy: copy or zero",
    )
    combine_method: str | None = Field(
        default=None,
        description="Combine method: concat or sum",
    )
    commutative: bool | None = Field(
        default=None,
        description="Sort sibling digests before concatenation",
    )


class TreeRequest(TreeOptions):
    """Request body for POST /tree endpoint."""

    leaves: list[str] = Field(
        ...,
        description="Leaf preimages in order",
    )
    include_tree: bool = Field(
        default=True,
        description="Include the rendered node structure in the response",
    )
    show_preimage: bool = Field(default=True)
    show_hash: bool = Field(default=True)
    truncate: bool = Field(
        default=True,
        description="Shorten digests in the node structure",
    )


class ProofRequest(TreeOptions):
    """Request body for POST /proof endpoint."""

    leaves: list[str] = Field(
        ...,
        description="Leaf preimages in order",
    )
    leaf_index: int = Field(
        ...,
        description="Zero-based index of the leaf to prove",
    )


class VerifyRequest(TreeOptions):
    """Request body for POST /verify endpoint."""

    proof: dict[str, Any] = Field(
        ...,
        description="Proof document with siblingDigests, leafPreimage and leafIndex",
    )
    root: str = Field(
        ...,
        min_length=1,
        description="Expected root digest (hex)",
    )
