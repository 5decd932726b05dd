"""
Hashtree API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "hashtree-api"
    version: str = "v1"


class AlgorithmsResponse(BaseModel):
    """Response for GET /algorithms endpoint."""

    algorithms: list[str] = Field(..., description="Supported hash algorithm identifiers")
    default: str = Field(..., description="Algorithm used when a request names none")


class TreeResponse(BaseModel):
    """Response for POST /tree endpoint."""

    ok: bool = True
    root: str | None = Field(..., description="Root digest, null for no leaves")
    leaf_count: int = Field(..., description="Number of leaves given")
    padded_count: int = Field(..., description="Number of leaves after padding")
    depth: int = Field(..., description="Number of edges from root to leaves")
    config: dict[str, Any] = Field(..., description="Tree configuration used")
    tree: dict[str, Any] | None = Field(
        default=None,
        description="Node structure ({name, digest, attributes, children})",
    )


class ProofResponse(BaseModel):
    """Response for POST /proof endpoint."""

    ok: bool = True
    root: str | None = Field(default=None, description="Root digest of the padded tree")
    proof: dict[str, Any] | None = Field(
        default=None,
        description="Proof document, null when the index selects no leaf",
    )
    config: dict[str, Any] = Field(..., description="Tree configuration used")


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the proof reproduces the root")
    expected_root: str = Field(..., description="Root digest supplied by the caller")
    computed_root: str = Field(..., description="Root digest recomputed from the proof")
    config: dict[str, Any] = Field(..., description="Tree configuration used")


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
