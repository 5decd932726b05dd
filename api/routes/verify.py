"""
Hashtree API Verify Route

Check an inclusion proof against a root digest.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from pydantic import ValidationError

from api.deps import get_tree_config
from api.errors import InvalidRequestError
from api.models.requests import VerifyRequest
from api.models.responses import VerifyResponse
from core.merkle import MerkleProof, MerkleVerifier


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify_proof(request: VerifyRequest) -> VerifyResponse:
    """
    Verify a proof document.

    A proof that does not reproduce the root is a normal response with
    valid=false; malformed digests are 400 errors.
    """
    config = get_tree_config(request)

    try:
        proof = MerkleProof.model_validate(request.proof)
    except ValidationError as e:
        raise InvalidRequestError(
            "Invalid proof document",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    result = MerkleVerifier.check(proof, request.root, config)
    logger.info(f"Proof for leaf {proof.leaf_index}: valid={result.ok}")

    return VerifyResponse(
        ok=True,
        valid=result.ok,
        expected_root=result.expected_root,
        computed_root=result.computed_root,
        config=config.model_dump(mode="json"),
    )
