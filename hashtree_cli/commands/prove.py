"""
CLI Prove Command

Generate an inclusion proof for one leaf and print or save it.

Usage:
    hashtree prove a b c d --index 2 [--out proof.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.merkle import MerkleProver, compute_merkle_root
from hashtree_cli.commands import EXIT_SUCCESS, read_leaves, resolve_tree_config


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    An out-of-range index or an empty leaf list is not an error: there is
    simply no proof to show.

    Returns:
        Exit code
    """
    leaves = read_leaves(args)
    config = resolve_tree_config(args)

    proof = MerkleProver.prove(leaves, args.index, config)
    if proof is None:
        logger.info(f"No proof for index {args.index} over {len(leaves)} leaves")
        if args.json:
            print("null")
        else:
            print(f"No leaf selected (index {args.index}, {len(leaves)} leaves)", file=sys.stderr)
        return EXIT_SUCCESS

    document = proof.to_json()
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(document + "\n", encoding="utf-8")
        logger.info(f"Saved proof to: {out_path}")

    if args.json:
        print(json.dumps(proof.to_dict(), indent=2, ensure_ascii=False))
        return EXIT_SUCCESS

    root = compute_merkle_root(leaves, config)
    print(f"leaf: {proof.leaf_index} {proof.leaf_preimage!r}")
    print(f"root: {root}")
    print(f"siblings ({proof.depth}):")
    for level, sibling in enumerate(proof.sibling_digests):
        print(f"  [{level}] {sibling}")
    if args.out:
        print(f"saved: {args.out}")
    return EXIT_SUCCESS
