"""API request and response models."""

from api.models.requests import ProofRequest, TreeOptions, TreeRequest, VerifyRequest
from api.models.responses import (
    AlgorithmsResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    ProofResponse,
    TreeResponse,
    VerifyResponse,
)

__all__ = [
    "TreeOptions",
    "TreeRequest",
    "ProofRequest",
    "VerifyRequest",
    "HealthResponse",
    "AlgorithmsResponse",
    "TreeResponse",
    "ProofResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
