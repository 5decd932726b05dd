"""
Hashtree API Proof Route

Generate an inclusion proof for one leaf.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_tree_config
from api.models.requests import ProofRequest
from api.models.responses import ProofResponse
from core.merkle import MerkleProver, compute_merkle_root


logger = logging.getLogger(__name__)

router = APIRouter(tags=["proof"])


@router.post("/proof", response_model=ProofResponse)
async def generate_proof(request: ProofRequest) -> ProofResponse:
    """
    Generate the sibling path for request.leaf_index.

    When the index selects no leaf the response carries proof=null
    rather than an error.
    """
    config = get_tree_config(request)
    proof = MerkleProver.prove(request.leaves, request.leaf_index, config)

    if proof is None:
        logger.info(f"No proof for index {request.leaf_index} over {len(request.leaves)} leaves")

    return ProofResponse(
        ok=True,
        root=compute_merkle_root(request.leaves, config),
        proof=proof.to_dict() if proof is not None else None,
        config=config.model_dump(mode="json"),
    )
