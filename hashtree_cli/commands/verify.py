"""
CLI Verify Command

Check an exported proof against a root digest.

Usage:
    hashtree verify proof.json --root <hex> [--algorithm sha256] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from core.merkle import MerkleProof, MerkleVerifier
from hashtree_cli.commands import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    resolve_tree_config,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    ok: bool = False
    leaf_index: int = 0
    leaf_preimage: str = ""
    expected_root: str = ""
    computed_root: str = ""
    algorithm: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_proof(path: str) -> MerkleProof:
    """Read a proof document from a file, or stdin for '-'."""
    if path == "-":
        return MerkleProof.from_json(sys.stdin.read())
    return MerkleProof.from_json(Path(path).read_text(encoding="utf-8"))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the proof reproduces the root,
        EXIT_VERIFICATION_FAILED otherwise
    """
    config = resolve_tree_config(args)
    proof = load_proof(args.proof_path)

    logger.info(f"Verifying proof for leaf {proof.leaf_index} ({proof.depth} siblings)")
    result = MerkleVerifier.check(proof, args.root, config)
    ok = result.ok

    summary = VerifySummary(
        ok=ok,
        leaf_index=proof.leaf_index,
        leaf_preimage=proof.leaf_preimage,
        expected_root=result.expected_root,
        computed_root=result.computed_root,
        algorithm=config.algorithm.value,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(f"leaf: {summary.leaf_index} {summary.leaf_preimage!r}")
        print(f"expected_root: {summary.expected_root}")
        print(f"computed_root: {summary.computed_root}")
        print(f"ok: {str(ok).lower()}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
