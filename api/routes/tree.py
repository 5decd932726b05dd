"""
Hashtree API Tree Route

Build a padded Merkle tree and return its root and structure.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_tree_config
from api.models.requests import TreeRequest
from api.models.responses import TreeResponse
from core.merkle import build_padded_tree, pad_leaves, tree_depth, tree_to_dict


logger = logging.getLogger(__name__)

router = APIRouter(tags=["tree"])


@router.post("/tree", response_model=TreeResponse)
async def build_tree(request: TreeRequest) -> TreeResponse:
    """
    Build a tree over the given leaves.

    An empty leaf list is not an error: root and tree are null.
    """
    config = get_tree_config(request)
    logger.info(f"Building {config.algorithm.value} tree over {len(request.leaves)} leaves")

    root = build_padded_tree(request.leaves, config)
    tree = None
    if request.include_tree:
        tree = tree_to_dict(
            root,
            show_preimage=request.show_preimage,
            show_hash=request.show_hash,
            truncate=request.truncate,
        )

    return TreeResponse(
        ok=True,
        root=root.digest if root is not None else None,
        leaf_count=len(request.leaves),
        padded_count=len(pad_leaves(request.leaves, config.pad_strategy)),
        depth=tree_depth(root),
        config=config.model_dump(mode="json"),
        tree=tree,
    )
